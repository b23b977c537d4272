"""
HTTP API for idea research.

POST /api/research runs the research pipeline for one query and returns
``{keywords, summary}``. POST /api/research/records stores a result in
the archive.
"""
import logging
import os
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .database.db import ResearchDatabase
from .database.models import ResearchRecordIn, ResearchReport, ResearchRequest
from .exceptions import InvalidInputError, QuotaExceededError
from .logging_config import setup_logging
from .manager import ResearchManager

logger = logging.getLogger(__name__)

QUOTA_MESSAGE = "OpenAI quota exceeded. Check billing."
INTERNAL_MESSAGE = "Internal server error. Try again later."


def create_app(manager: Optional[ResearchManager] = None,
               database: Optional[ResearchDatabase] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        manager: Research pipeline; built from the environment on first use
        database: Research archive; built from the environment on first use
    """
    app = FastAPI(
        title="Idea Research Assistant",
        description="Market research summaries for startup ideas",
        version="0.1.0",
    )
    app.state.manager = manager
    app.state.database = database

    def get_manager(request: Request) -> ResearchManager:
        if request.app.state.manager is None:
            request.app.state.manager = ResearchManager()
        return request.app.state.manager

    def get_database(request: Request) -> ResearchDatabase:
        if request.app.state.database is None:
            request.app.state.database = ResearchDatabase()
        return request.app.state.database

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError):
        logger.warning(f"Invalid request body: {exc.errors()}")
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    @app.get("/api/health")
    def health():
        return {"status": "ok", "service": "idea-research"}

    @app.post("/api/research", response_model=ResearchReport)
    def research(body: ResearchRequest, request: Request):
        """Research a startup idea and return keywords plus a Markdown report"""
        try:
            return get_manager(request).run(body.query)
        except InvalidInputError as e:
            return JSONResponse(status_code=400, content={"error": str(e)})
        except QuotaExceededError as e:
            logger.error(f"API Error: {e}")
            return JSONResponse(status_code=429, content={"error": QUOTA_MESSAGE})
        except Exception as e:
            logger.exception(f"API Error: {e}")
            return JSONResponse(status_code=500, content={"error": INTERNAL_MESSAGE})

    @app.post("/api/research/records", status_code=201)
    def save_record(body: ResearchRecordIn, request: Request):
        """Append a research result to the archive"""
        try:
            record_id = get_database(request).save_research(body.idea, body.keywords, body.summary)
        except ValueError as e:
            return JSONResponse(status_code=400, content={"error": str(e)})
        except Exception as e:
            logger.error(f"Failed to save research record: {e}")
            return JSONResponse(status_code=503, content={"error": "Research archive unavailable"})
        return {"id": record_id}

    return app


app = create_app()


def main():
    """Serve the API with uvicorn"""
    import uvicorn

    setup_logging()
    uvicorn.run(
        "src.idea_research.api:app",
        host=os.getenv('HOST', '127.0.0.1'),
        port=int(os.getenv('PORT', '8000')),
    )


if __name__ == "__main__":
    main()
