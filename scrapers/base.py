"""
Base Scraper
Abstract base class for every provider adapter
"""
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar
from urllib.parse import urlparse
import asyncio
import logging

import httpx

from config import Settings, get_settings
from models import SourceType


logger = logging.getLogger(__name__)

T = TypeVar("T")  # candidate type produced by the adapter
R = TypeVar("R")


def extract_domain(url: str) -> str:
    """Host name of ``url`` (scheme optional) without a leading ``www.``"""
    value = str(url or "").strip()
    if not value:
        return ""
    try:
        host = urlparse(value if value.startswith("http") else f"https://{value}").hostname
    except ValueError:
        return value
    if not host:
        return value
    return host[4:] if host.startswith("www.") else host


def api_error_message(response: httpx.Response) -> str:
    """``error.message`` from a Google API error body, if any"""
    try:
        payload = response.json()
    except ValueError:
        return "Unknown error"
    error = payload.get("error") if isinstance(payload, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return "Unknown error"


class BaseScraper(ABC, Generic[T]):
    """
    Provider adapter base class

    Subclasses normalize one provider's response into VideoCandidate or
    ArticleCandidate records. An injected ``client`` is used as-is and never
    closed by the adapter; otherwise one is created lazily and closed by
    ``close()``.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.settings = settings or get_settings()
        self._session = client
        self._owns_session = client is None

    @property
    @abstractmethod
    def source_type(self) -> SourceType:
        """Provider this adapter talks to"""
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable adapter name"""
        pass

    @abstractmethod
    async def search(self, query: str) -> List[T]:
        """
        Search the provider

        Args:
            query: free-text topic

        Returns:
            Normalized candidates, capped per provider
        """
        pass

    def is_configured(self) -> bool:
        """Whether required credentials are present"""
        return True

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Release the HTTP client created by this adapter"""
        if self._session is not None and self._owns_session:
            await self._session.aclose()
            self._session = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._session is None:
            self._session = httpx.AsyncClient(
                timeout=httpx.Timeout(float(self.settings.general.request_timeout)),
                follow_redirects=True,
            )
            self._owns_session = True
        return self._session

    async def _get(
        self,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        """Single GET request; status handling is left to the caller"""
        client = self._get_client()
        return await client.get(url, params=params, headers=headers)

    async def _run_blocking(self, func: Callable[..., R], *args, **kwargs) -> R:
        """Run a blocking SDK call in the default thread pool"""
        return await asyncio.to_thread(func, *args, **kwargs)

    def _log_search(self, query: str, count: int):
        logger.info(f"[{self.name}] Search '{query}' returned {count} results")

    def _log_error(self, message: str, error: Exception):
        logger.error(f"[{self.name}] {message}: {error}")
