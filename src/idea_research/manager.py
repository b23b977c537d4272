# src/idea_research/manager.py
"""
Research pipeline for a single startup idea.

Runs keyword extraction, web search, scraping of the top result,
chunked summarization and a final merge into a Markdown report. Every
outbound call is made sequentially and bounded by the configured caps.
"""
from typing import List, Optional
import logging
from .completion import CompletionClient
from .config import Settings
from .database.models import ResearchReport
from .exceptions import InvalidInputError
from .page_text import extract_page_text
from .search_client import WebResearchClient
from .text_processing import keywords_label, split_into_chunks

logger = logging.getLogger(__name__)

NO_RESULTS = "No results found."
NO_RELEVANT_DATA = "No relevant data found from scraped pages."
NO_SUMMARY = "No summary generated."

CHUNK_PROMPT = "Summarize this competitor & market data clearly."

MERGE_PROMPT = """You are a business research assistant. Combine these summaries into a single structured **business research report**.

Rules:
- Markdown format
- Headings (#, ##, ###)
- Lists and bullets
- Bold/italic emphasis
- Clean, professional style"""


def build_search_phrase(keywords: str) -> str:
    """Search phrase that steers the provider towards market data"""
    return f"market research, competitors, trends for: {keywords}"


class ResearchManager:
    """Manages the research process end-to-end"""

    def __init__(self,
                 search_client: Optional[WebResearchClient] = None,
                 completion_client: Optional[CompletionClient] = None,
                 settings: Optional[Settings] = None):
        """Initialize manager components"""
        self.settings = settings or Settings.from_env()
        self.search_client = search_client or WebResearchClient(settings=self.settings)
        self.completion_client = completion_client or CompletionClient(settings=self.settings)
        logger.info("ResearchManager initialized successfully")

    def run(self, query: Optional[str]) -> ResearchReport:
        """
        Research an idea and summarize the findings.

        Args:
            query: Free-text idea or research question

        Returns:
            ResearchReport with comma-joined keywords and a Markdown summary.
            Empty search or scrape outcomes return an explanatory summary.

        Raises:
            InvalidInputError: If the query is missing or blank
            QuotaExceededError: If a provider stayed rate limited
            SearchError: If search operation fails
        """
        if not isinstance(query, str) or not query.strip():
            raise InvalidInputError("Missing query text")

        logger.info(f"User query: {query}")
        keywords = keywords_label(query)

        response = self.search_client.search(build_search_phrase(keywords))
        if not response.web:
            logger.info("Search returned no web results")
            return ResearchReport(keywords=keywords, summary=NO_RESULTS)

        scraped_text = self.gather_text(response.top_results(self.settings.max_pages))
        if not scraped_text.strip():
            return ResearchReport(keywords=keywords, summary=NO_RELEVANT_DATA)

        logger.info(f"Final scraped text length: {len(scraped_text)}")
        partial_summaries = self.summarize_chunks(
            split_into_chunks(scraped_text, self.settings.chunk_size)
        )
        summary = self.merge_summaries(partial_summaries)
        return ResearchReport(keywords=keywords, summary=summary or NO_SUMMARY)

    def gather_text(self, results) -> str:
        """
        Scrape each result in order until the total character cap is reached.

        A page that fails to scrape is logged and skipped.
        """
        scraped_text = ""
        for result in results:
            try:
                page = self.search_client.scrape(result.url)
            except Exception as e:
                logger.warning(f"Failed to scrape URL: {result.url} ({e})")
                continue

            page_text = extract_page_text(page)[:self.settings.max_chars_per_page]
            if page_text.strip():
                logger.info(f"Scraped {result.url} -> {len(page_text)} chars")
                scraped_text += page_text + "\n\n"
            if len(scraped_text) >= self.settings.max_total_chars:
                break
        return scraped_text

    def summarize_chunks(self, chunks: List[str]) -> List[str]:
        """Summarize each chunk in order, one completion call at a time"""
        partial_summaries = []
        for index, chunk in enumerate(chunks, start=1):
            logger.debug(f"Summarizing chunk {index}/{len(chunks)} ({len(chunk)} chars)")
            partial_summaries.append(self.completion_client.complete([
                {"role": "system", "content": CHUNK_PROMPT},
                {"role": "user", "content": chunk},
            ]))
        return partial_summaries

    def merge_summaries(self, partial_summaries: List[str]) -> str:
        """Combine partial summaries into one Markdown report"""
        return self.completion_client.complete([
            {"role": "system", "content": MERGE_PROMPT},
            {"role": "user", "content": "\n\n".join(partial_summaries)},
        ])
