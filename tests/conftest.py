"""Shared fixtures: offline settings and canned candidates."""

from __future__ import annotations

import asyncio
import json
from typing import Any, Dict, List, Tuple

import pytest

from config.settings import (
    GeminiSettings,
    GitHubSettings,
    GooglePSESettings,
    Settings,
    YouTubeSettings,
)
from intelligence.llm import BaseLLM, LLMResponse, Message
from models import ArticleCandidate, SourceType, VideoCandidate
from scrapers import BaseScraper


def make_settings(**overrides) -> Settings:
    """Settings with fake credentials; explicit values shadow the environment."""
    groups = {
        "youtube": YouTubeSettings(api_key="yt-key"),
        "google_pse": GooglePSESettings(api_key="pse-key", cx="pse-cx"),
        "github": GitHubSettings(token=None),
        "gemini": GeminiSettings(api_key="gemini-key"),
    }
    groups.update(overrides)
    return Settings(**groups)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


def video(video_id: str, title: str, channel: str, description: str = "") -> VideoCandidate:
    return VideoCandidate(
        video_id=video_id,
        title=title,
        channel_title=channel,
        published_at="2024-01-01T00:00:00Z",
        description=description,
    )


def article(url: str, title: str, source: str, snippet: str = "", source_type=SourceType.WEB) -> ArticleCandidate:
    return ArticleCandidate(url=url, title=title, source=source, snippet=snippet, source_type=source_type)


class ScriptedLLM(BaseLLM):
    """Deterministic oracle returning a canned body, or raising a canned error."""

    def __init__(self, content: str = "", error: Exception | None = None):
        super().__init__(model="fake-llm")
        self.content = content
        self.error = error
        self.calls: List[Tuple[List[Message], Dict[str, Any]]] = []
        self.closed = False

    @property
    def provider(self) -> str:
        return "fake"

    async def acomplete(self, messages: List[Message], **kwargs: Any) -> LLMResponse:
        self.calls.append((messages, kwargs))
        if self.error is not None:
            raise self.error
        return LLMResponse(content=self.content, model=self.model)

    async def aclose(self) -> None:
        self.closed = True


def section_payload(video_id: str = "", url: str = "", title: str = "Section") -> Dict[str, Any]:
    return {
        "title": title,
        "importance": "Why it matters",
        "overview": "What it covers",
        "imagePrompt": f"An illustration of {title.lower()}",
        "youtube": {"videoId": video_id, "channel": "Chan", "title": "Video", "reason": "Good intro"},
        "article": {"url": url, "source": "example.com", "note": "Deep dive"},
    }


def selection_json(sections: List[Dict[str, Any]], topic: str = "Stoicism") -> str:
    return json.dumps(
        {"topic": topic, "user_level": "intermediate", "summary": "A school of philosophy.", "sections": sections}
    )


class StubScraper(BaseScraper):
    """Adapter returning canned items or raising a canned error."""

    def __init__(self, settings, name, source_type, items=None, error=None, delay=0.0):
        super().__init__(settings)
        self._name = name
        self._source_type = source_type
        self._items = list(items or [])
        self._error = error
        self._delay = delay
        self.queries: List[str] = []
        self.closed = False

    @property
    def source_type(self):
        return self._source_type

    @property
    def name(self):
        return self._name

    async def search(self, query):
        self.queries.append(query)
        if self._delay:
            await asyncio.sleep(self._delay)
        if self._error is not None:
            raise self._error
        return self._items

    async def close(self):
        self.closed = True
