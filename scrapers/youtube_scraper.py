"""
YouTube Scraper
Video search through the YouTube Data API v3
API docs: https://developers.google.com/youtube/v3/docs/search/list
"""
from typing import Any, Dict, List, Optional
import logging

import httpx

from .base import BaseScraper, api_error_message
from config import Settings
from models import SourceType, VideoCandidate
from utils.exceptions import ConfigurationError, ScraperError


logger = logging.getLogger(__name__)


class YouTubeScraper(BaseScraper[VideoCandidate]):
    """
    YouTube video search

    Mandatory source: a missing API key raises ConfigurationError, and a
    non-success response raises ScraperError.
    """

    API_BASE = "https://www.googleapis.com/youtube/v3"

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[httpx.AsyncClient] = None,
        api_key: Optional[str] = None,
    ):
        super().__init__(settings, client)
        self._youtube_settings = self.settings.youtube
        self._api_key = api_key if api_key is not None else self._youtube_settings.api_key

    @property
    def source_type(self) -> SourceType:
        return SourceType.YOUTUBE

    @property
    def name(self) -> str:
        return "YouTube"

    def is_configured(self) -> bool:
        return bool(self._api_key)

    async def search(self, query: str) -> List[VideoCandidate]:
        if not self.is_configured():
            raise ConfigurationError("YOUTUBE_API_KEY is not configured")

        params = {
            "part": "snippet",
            "q": query,
            "type": "video",
            "maxResults": str(self._youtube_settings.max_results),
            "relevanceLanguage": self._youtube_settings.relevance_language,
            "safeSearch": self._youtube_settings.safe_search,
            "key": self._api_key,
        }

        logger.info(f"[YouTube] Searching: {query}")

        response = await self._get(
            f"{self.API_BASE}/search",
            params=params,
            headers={"Accept": "application/json"},
        )
        if response.is_error:
            raise ScraperError(
                f"YouTube API error: {response.status_code} - {api_error_message(response)}",
                source=self.name,
            )

        data = response.json()
        items = data.get("items") if isinstance(data, dict) else None
        if not isinstance(items, list):
            self._log_search(query, 0)
            return []

        videos = [self._convert_to_video(item) for item in items if isinstance(item, dict)]
        self._log_search(query, len(videos))
        return videos

    def _convert_to_video(self, item: Dict[str, Any]) -> VideoCandidate:
        ident = item.get("id") or {}
        snippet = item.get("snippet") or {}
        return VideoCandidate(
            video_id=ident.get("videoId") if isinstance(ident, dict) else "",
            title=snippet.get("title"),
            channel_title=snippet.get("channelTitle"),
            published_at=snippet.get("publishedAt"),
            description=snippet.get("description"),
        )

