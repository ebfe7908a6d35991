"""
ArXiv Scraper
Scientific preprints from the arXiv Atom API
"""
from typing import List, Optional
import logging

import arxiv

from .base import BaseScraper
from config import Settings
from models import ArticleCandidate, SourceType


logger = logging.getLogger(__name__)

ARXIV_SOURCE_LABEL = "ArXiv.org (Scientific Paper)"


class ArxivScraper(BaseScraper[ArticleCandidate]):
    """
    ArXiv paper search
    Uses the official ``arxiv`` Python client; no API key required
    """

    def __init__(self, settings: Optional[Settings] = None):
        super().__init__(settings)
        self._arxiv_settings = self.settings.arxiv

    @property
    def source_type(self) -> SourceType:
        return SourceType.ARXIV

    @property
    def name(self) -> str:
        return "ArXiv"

    async def search(self, query: str) -> List[ArticleCandidate]:
        """
        Search arXiv across all fields

        Args:
            query: search keywords

        Returns:
            At most ``arxiv.max_results`` papers; empty on any API failure
        """
        max_results = self._arxiv_settings.max_results
        search_query = f"all:{query}"

        logger.info(f"[ArXiv] Searching: {search_query}")

        try:
            results = await self._run_blocking(self._sync_search, search_query, max_results)
        except (arxiv.ArxivError, OSError) as e:
            self._log_error(f"Search failed for '{query}'", e)
            return []

        papers = [paper for paper in (self._convert_to_article(r) for r in results) if paper]
        papers = papers[:max_results]
        self._log_search(query, len(papers))
        return papers

    def _sync_search(self, query: str, max_results: int) -> List[arxiv.Result]:
        """Blocking search; one request, no client-side retries"""
        client = arxiv.Client(
            page_size=max_results,
            delay_seconds=0.0,
            num_retries=0,
        )

        search = arxiv.Search(
            query=query,
            max_results=max_results,
        )

        return list(client.results(search))

    def _convert_to_article(self, result: arxiv.Result) -> Optional[ArticleCandidate]:
        title = " ".join(str(result.title or "").split("\n")).strip()
        entry_id = str(result.entry_id or "").strip()
        if not title or not entry_id:
            return None

        return ArticleCandidate(
            title=f"[Paper] {title}",
            url=entry_id,
            source=ARXIV_SOURCE_LABEL,
            snippet=self._summarize(result.summary),
            source_type=SourceType.ARXIV,
        )

    def _summarize(self, summary: Optional[str]) -> str:
        text = str(summary or "").replace("\n", " ").strip()
        if not text:
            return "No summary available."
        return text[: self._arxiv_settings.summary_chars] + "..."
