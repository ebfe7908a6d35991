"""
Web / News Search Scrapers
Google Programmable Search Engine (Custom Search JSON API)
"""
from typing import Any, Dict, List, Optional
import logging

import httpx

from .base import BaseScraper, api_error_message, extract_domain
from config import Settings
from models import ArticleCandidate, SourceType
from utils.exceptions import ConfigurationError, ScraperError


logger = logging.getLogger(__name__)

GOOGLE_PSE_BASE = "https://www.googleapis.com/customsearch/v1"


class WebSearchScraper(BaseScraper[ArticleCandidate]):
    """
    General web search

    Mandatory source: missing key or engine id raises ConfigurationError, and a
    non-success response raises ScraperError.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[httpx.AsyncClient] = None,
        api_key: Optional[str] = None,
        cx: Optional[str] = None,
    ):
        super().__init__(settings, client)
        self._pse_settings = self.settings.google_pse
        self._api_key = api_key if api_key is not None else self._pse_settings.api_key
        self._cx = cx if cx is not None else self._pse_settings.cx

    @property
    def source_type(self) -> SourceType:
        return SourceType.WEB

    @property
    def name(self) -> str:
        return "Web"

    def is_configured(self) -> bool:
        return bool(self._api_key and self._cx)

    async def search(self, query: str) -> List[ArticleCandidate]:
        if not self.is_configured():
            raise ConfigurationError("GOOGLE_PSE_API_KEY or GOOGLE_PSE_CX is not configured")

        params = {
            "key": self._api_key,
            "cx": self._cx,
            "q": query,
            "num": str(self._pse_settings.web_max_results),
            "safe": "active",
        }

        logger.info(f"[Web] Searching: {query}")

        response = await self._get(GOOGLE_PSE_BASE, params=params, headers={"Accept": "application/json"})
        if response.is_error:
            raise ScraperError(
                f"Google PSE error: {response.status_code} - {api_error_message(response)}",
                source=self.name,
            )

        articles = _convert_items(response.json(), source_type=SourceType.WEB)
        self._log_search(query, len(articles))
        return articles


class NewsSearchScraper(WebSearchScraper):
    """
    Recent news through the same search engine

    Optional source: missing credentials or a failed response yield no
    results instead of an error.
    """

    @property
    def source_type(self) -> SourceType:
        return SourceType.NEWS

    @property
    def name(self) -> str:
        return "News"

    async def search(self, query: str) -> List[ArticleCandidate]:
        if not self.is_configured():
            logger.warning("[News] Search skipped: GOOGLE_PSE_API_KEY or GOOGLE_PSE_CX is not configured")
            return []

        params = {
            "key": self._api_key,
            "cx": self._cx,
            "q": f"{query} news",
            "sort": "date:r:pastMonth",
            "num": str(self._pse_settings.news_max_results),
        }

        logger.info(f"[News] Searching: {query}")

        try:
            response = await self._get(GOOGLE_PSE_BASE, params=params)
            if response.is_error:
                logger.warning(f"[News] Search failed with status {response.status_code}")
                return []
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            self._log_error("Search failed", e)
            return []

        articles = _convert_items(data, source_type=SourceType.NEWS, title_prefix="[News] ")
        self._log_search(query, len(articles))
        return articles


def _convert_items(
    data: Any,
    *,
    source_type: SourceType,
    title_prefix: str = "",
) -> List[ArticleCandidate]:
    items = data.get("items") if isinstance(data, dict) else None
    if not isinstance(items, list):
        return []
    return [_convert_item(item, source_type, title_prefix) for item in items if isinstance(item, dict)]


def _convert_item(item: Dict[str, Any], source_type: SourceType, title_prefix: str) -> ArticleCandidate:
    link = str(item.get("link") or "")
    return ArticleCandidate(
        title=f"{title_prefix}{item.get('title') or ''}",
        url=link,
        source=extract_domain(item.get("displayLink") or link),
        snippet=item.get("snippet"),
        source_type=source_type,
    )
