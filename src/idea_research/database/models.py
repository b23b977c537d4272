# src/idea_research/database/models.py

import time
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


def _now_millis() -> int:
    return int(time.time() * 1000)


class ResearchRequest(BaseModel):
    """Body of a research request"""
    query: Optional[str] = None


class ResearchReport(BaseModel):
    """Keywords and Markdown summary produced for one query"""
    model_config = ConfigDict(frozen=True)

    keywords: str
    summary: str


class ResearchRecordIn(BaseModel):
    """Fields a caller submits to the archive"""
    idea: str
    keywords: str = ""
    summary: str = ""


class ResearchRecord(ResearchRecordIn):
    """Stored research result; createdAt is epoch milliseconds"""
    model_config = ConfigDict(populate_by_name=True)

    created_at: int = Field(default_factory=_now_millis, alias="createdAt")

    def to_document(self) -> dict:
        """Document shape written to MongoDB"""
        return self.model_dump(by_alias=True)
