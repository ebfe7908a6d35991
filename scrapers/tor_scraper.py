"""
Tor Search Scraper
Onion-service search through the Ahmia clearnet front-end (https://ahmia.fi)
"""
from typing import Iterator, List, Optional, Tuple
from urllib.parse import parse_qs, urlparse
import logging

from bs4 import BeautifulSoup
import httpx

from .base import BaseScraper
from config import Settings
from models import ArticleCandidate, SourceType


logger = logging.getLogger(__name__)

TOR_SOURCE_LABEL = "Tor Network (Onion Site)"


def _redirect_target(href: str) -> str:
    """``redirect_url`` query value of an Ahmia ``/redirect/`` link"""
    values = parse_qs(urlparse(href).query).get("redirect_url")
    return values[0] if values else ""


def iter_onion_results(markup: str) -> Iterator[Tuple[str, str, str]]:
    """Yield ``(url, title, snippet)`` for result blocks linking to ``.onion`` hosts"""
    soup = BeautifulSoup(markup, "lxml")
    for block in soup.select("li.result"):
        link = block.select_one("h4 a[href]")
        if link is None:
            continue
        url = _redirect_target(link["href"])
        if ".onion" not in url:
            continue
        paragraph = block.find("p")
        snippet = paragraph.get_text(" ", strip=True) if paragraph else ""
        yield url, link.get_text(" ", strip=True), snippet


class TorSearchScraper(BaseScraper[ArticleCandidate]):
    """
    Ahmia result-page scraper

    Walks the flat HTML result list (one block per hit) and keeps
    at most ``tor.max_results`` onion links. Any failure yields no results.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(settings, client)
        self._tor_settings = self.settings.tor

    @property
    def source_type(self) -> SourceType:
        return SourceType.TOR

    @property
    def name(self) -> str:
        return "Tor"

    async def search(self, query: str) -> List[ArticleCandidate]:
        logger.info(f"[Tor] Searching: {query}")

        try:
            response = await self._get(
                self._tor_settings.search_url,
                params={"q": query},
                headers={"User-Agent": self.settings.general.user_agent},
            )
        except httpx.HTTPError as e:
            self._log_error("Search failed", e)
            return []

        if response.is_error:
            logger.warning(f"[Tor] Ahmia search failed with status {response.status_code}")
            return []

        articles = self.parse_results(response.text)
        self._log_search(query, len(articles))
        return articles

    def parse_results(self, markup: str) -> List[ArticleCandidate]:
        articles: List[ArticleCandidate] = []
        for url, title, snippet in iter_onion_results(markup):
            articles.append(
                ArticleCandidate(
                    title=f"[Tor] {title}",
                    url=url,
                    source=TOR_SOURCE_LABEL,
                    snippet=snippet,
                    source_type=SourceType.TOR,
                )
            )
            if len(articles) >= self._tor_settings.max_results:
                break
        return articles
