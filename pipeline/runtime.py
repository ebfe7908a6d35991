"""End-to-end digest pipeline: fetch, filter, select, validate, illustrate."""

from __future__ import annotations

import logging
from time import perf_counter
from typing import Optional

from pydantic import ValidationError

from aggregator import DataAggregator
from config import Settings, get_settings
from intelligence.llm import get_llm
from models import CandidateSet, Digest, DigestRequest, DigestResult
from pipeline.filters import build_candidate_set
from pipeline.imagery import ImageAugmenter
from pipeline.provenance import validate_selection
from pipeline.selection import SelectionEngine
from utils.exceptions import DigestError, InvalidRequestError, NoRelevantCandidatesError


logger = logging.getLogger(__name__)

NO_CANDIDATES_MESSAGE = (
    "External sources temporarily unavailable: No relevant results found for this topic after filtering."
)


class DigestPipeline:
    """One run per call; holds no per-request state between runs."""

    def __init__(
        self,
        *,
        aggregator: DataAggregator,
        selector: SelectionEngine,
        augmenter: ImageAugmenter,
    ) -> None:
        self.aggregator = aggregator
        self.selector = selector
        self.augmenter = augmenter

    async def run(self, topic: str, lang: str = "tr") -> DigestResult:
        started = perf_counter()
        try:
            digest = await self._execute(topic, lang)
        except DigestError as exc:
            logger.error("digest_failed kind=%s error=%s", exc.kind.value, exc)
            return DigestResult.fail(exc.to_pipeline_error())
        logger.info("digest_completed topic=%s elapsed=%.2fs", digest.topic, perf_counter() - started)
        return DigestResult.ok(digest)

    async def collect_candidates(self, topic: str, show_progress: bool = False) -> CandidateSet:
        """Fetch from every source and apply the deterministic filter."""
        logger.info("layer1_fetch topic=%s", topic)
        pools = await self.aggregator.gather(topic, show_progress=show_progress)
        if pools.failed_sources:
            logger.warning("layer1_degraded failed=%s", ",".join(pools.failed_sources))

        candidates = build_candidate_set(pools.videos, pools.articles, topic)
        logger.info(
            "layer2_filter videos=%d/%d articles=%d/%d",
            len(candidates.videos),
            len(pools.videos),
            len(candidates.articles),
            len(pools.articles),
        )
        return candidates

    async def _execute(self, topic: str, lang: str) -> Digest:
        request = _validate_request(topic, lang)

        candidates = await self.collect_candidates(request.topic)
        if candidates.is_empty:
            raise NoRelevantCandidatesError(NO_CANDIDATES_MESSAGE)

        logger.info("layer3_select lang=%s", request.lang)
        draft = await self.selector.select(request.topic, request.lang, candidates)
        digest = validate_selection(draft, candidates)

        logger.info("layer4_images sections=%d", len(digest.sections))
        sections = await self.augmenter.augment(digest.sections)
        return digest.model_copy(update={"sections": sections})

    async def close(self) -> None:
        await self.aggregator.close()
        await self.selector.llm.aclose()


def _validate_request(topic: str, lang: str) -> DigestRequest:
    try:
        return DigestRequest(topic=topic, lang=lang)
    except ValidationError as exc:
        raise InvalidRequestError(
            "A non-empty topic and a language of 'en' or 'tr' are required",
            {"errors": exc.error_count()},
        ) from exc


def build_pipeline(settings: Optional[Settings] = None) -> DigestPipeline:
    """Default pipeline wired from settings; raises ConfigurationError without an oracle key."""
    settings = settings or get_settings()
    return DigestPipeline(
        aggregator=DataAggregator(settings=settings),
        selector=SelectionEngine(get_llm(settings)),
        augmenter=ImageAugmenter(settings=settings),
    )


async def run(topic: str, lang: str = "tr", *, settings: Optional[Settings] = None) -> DigestResult:
    """Pipeline entry point: a full digest or a tagged error, never a partial digest."""
    try:
        pipeline = build_pipeline(settings)
    except DigestError as exc:
        logger.error("digest_unavailable kind=%s error=%s", exc.kind.value, exc)
        return DigestResult.fail(exc.to_pipeline_error())

    try:
        return await pipeline.run(topic, lang)
    finally:
        await pipeline.close()
