"""Per-section illustration locators (URL-templated, generated on first fetch)."""

from __future__ import annotations

import asyncio
import logging
import random
from typing import List, Optional, Sequence
from urllib.parse import quote

from config import Settings, get_settings
from models import Section


logger = logging.getLogger(__name__)

_SEED_MAX = 1_000_000


class ImageAugmenter:
    """Builds one image locator per section; a failing section gets an empty reference."""

    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        width: Optional[int] = None,
        height: Optional[int] = None,
        rng: Optional[random.Random] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        image = (settings or get_settings()).image
        self.base_url = str(base_url or image.base_url).rstrip("/")
        self.width = int(width or image.width)
        self.height = int(height or image.height)
        self._rng = rng or random.Random()

    def build_locator(self, prompt: str) -> str:
        encoded = quote(str(prompt or ""), safe="")
        seed = self._rng.randrange(_SEED_MAX)
        return f"{self.base_url}/prompt/{encoded}?width={self.width}&height={self.height}&nologo=true&seed={seed}"

    async def illustrate(self, prompt_or_title: str) -> str:
        text = str(prompt_or_title or "").strip()
        if not text:
            return ""
        return self.build_locator(text)

    async def augment(self, sections: Sequence[Section]) -> List[Section]:
        """Illustrate every section concurrently; returns updated copies in order."""
        tasks = [self.illustrate(section.image_prompt or section.title) for section in sections]
        results = await asyncio.gather(*tasks, return_exceptions=True)

        augmented: List[Section] = []
        for idx, (section, result) in enumerate(zip(sections, results)):
            if isinstance(result, Exception):
                logger.warning("image_failed section=%d error=%s", idx, result)
                result = ""
            augmented.append(section.model_copy(update={"image_url": result}))
        return augmented
