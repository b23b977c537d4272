"""
Tavily-backed web search and page scraping for idea research.
"""
import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field
from tavily import TavilyClient
from tavily.errors import UsageLimitExceededError

from .config import Settings
from .exceptions import ConfigurationError, QuotaExceededError, ScrapeError, SearchError
from .utils import retry

logger = logging.getLogger(__name__)


class SearchResult(BaseModel):
    """Single web hit; only ``url`` is guaranteed"""
    url: str
    title: Optional[str] = None
    content: Optional[str] = None
    score: Optional[float] = None


class SearchResponse(BaseModel):
    """Normalized search provider response"""
    web: List[Dict[str, Any]] = Field(default_factory=list)

    def top_results(self, limit: int) -> List[SearchResult]:
        """Scrapeable hits among the first ``limit`` items"""
        results = []
        for item in self.web[:limit]:
            if not is_web_result(item):
                continue
            title = item.get('title')
            content = item.get('content')
            score = item.get('score')
            results.append(SearchResult(
                url=item['url'],
                title=title if isinstance(title, str) else None,
                content=content if isinstance(content, str) else None,
                score=float(score) if isinstance(score, (int, float)) and not isinstance(score, bool) else None
            ))
        return results


def is_web_result(item: Any) -> bool:
    """True when an item carries a string ``url`` and can be scraped"""
    return isinstance(item, dict) and isinstance(item.get('url'), str)


def _is_usage_limit(error: Exception) -> bool:
    if isinstance(error, UsageLimitExceededError):
        return True
    response = getattr(error, 'response', None)
    return getattr(response, 'status_code', None) == 429


class WebResearchClient:
    """Search and scrape operations using the Tavily API"""

    def __init__(self,
                 client: Optional[TavilyClient] = None,
                 settings: Optional[Settings] = None,
                 search_depth: str = "basic",
                 max_results: int = 5):
        """
        Args:
            client: Pre-built Tavily client; built from settings when omitted
            settings: Settings used to build the client
            search_depth: Tavily search depth ("basic" or "advanced")
            max_results: Number of search hits to request
        """
        self.search_depth = search_depth
        self.max_results = max_results
        self.client = client or self._setup_client(settings or Settings.from_env())

    def _setup_client(self, settings: Settings) -> TavilyClient:
        """Set up the Tavily client"""
        try:
            client = TavilyClient(api_key=settings.require('tavily_api_key'))
            logger.info("Tavily client initialized")
            return client
        except ConfigurationError:
            raise
        except Exception as e:
            logger.error(f"Failed to initialize Tavily client: {str(e)}")
            raise ConfigurationError(f"Client initialization failed: {str(e)}")

    @retry(max_attempts=3, delay=1.0, should_retry=_is_usage_limit)
    def _search_raw(self, query: str) -> Dict[str, Any]:
        return self.client.search(
            query=query,
            search_depth=self.search_depth,
            max_results=self.max_results
        )

    def search(self, query: str) -> SearchResponse:
        """
        Run a web search.

        Args:
            query: Search phrase

        Returns:
            SearchResponse whose ``web`` list keeps provider order

        Raises:
            QuotaExceededError: If the provider stayed rate limited
            SearchError: If search operation fails
        """
        try:
            raw = self._search_raw(query)
        except QuotaExceededError:
            raise
        except Exception as e:
            logger.error(f"Search failed: {str(e)}")
            raise SearchError(f"Search operation failed: {str(e)}")

        if not isinstance(raw, dict):
            logger.warning(f"Unexpected search response type: {type(raw).__name__}")
            return SearchResponse()

        items = raw.get('web')
        if items is None:
            items = raw.get('results')
        if not isinstance(items, list):
            return SearchResponse()

        logger.info(f"Search returned {len(items)} results")
        return SearchResponse(web=[item for item in items if isinstance(item, dict)])

    def scrape(self, url: str) -> Dict[str, Any]:
        """
        Fetch a single page.

        Args:
            url: Page address

        Returns:
            Raw page payload (shape varies, see page_text)

        Raises:
            ScrapeError: If the page could not be fetched
        """
        try:
            response = self.client.extract(urls=[url])
        except Exception as e:
            raise ScrapeError(f"Failed to scrape {url}: {str(e)}")

        if not isinstance(response, dict):
            raise ScrapeError(f"Failed to scrape {url}: unexpected response")

        results = response.get('results') or []
        if results:
            return results[0]

        failed = response.get('failed_results') or []
        reason = 'empty response'
        if failed and isinstance(failed[0], dict):
            reason = failed[0].get('error', 'unknown error')
        raise ScrapeError(f"Failed to scrape {url}: {reason}")
