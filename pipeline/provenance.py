"""Provenance check: every citation must be a literal member of the supplied candidates."""

from __future__ import annotations

import logging
from typing import List, Tuple

from models import CandidateSet, Digest, DigestDraft
from utils.exceptions import SelectionHallucinatedError


logger = logging.getLogger(__name__)


def find_violations(draft: DigestDraft, candidates: CandidateSet) -> List[Tuple[int, str, str]]:
    """``(section_index, field, value)`` for each citation outside the candidate set."""
    valid_video_ids = candidates.video_ids()
    valid_urls = candidates.article_urls()

    violations: List[Tuple[int, str, str]] = []
    for idx, section in enumerate(draft.sections):
        video_id = section.youtube.video_id
        if video_id and video_id not in valid_video_ids:
            violations.append((idx, "videoId", video_id))
        url = section.article.url
        if url and url not in valid_urls:
            violations.append((idx, "url", url))
    return violations


def validate_selection(draft: DigestDraft, candidates: CandidateSet) -> Digest:
    """
    Promote a draft to a trusted Digest.

    ``candidates`` must be the exact set used to build the selection prompt.
    One foreign reference rejects the whole digest.
    """
    violations = find_violations(draft, candidates)
    if violations:
        for idx, field, value in violations:
            logger.error("hallucinated_reference section=%d field=%s value=%s", idx, field, value)
        _, field, value = violations[0]
        raise SelectionHallucinatedError(
            "LLM returned resources not in candidate lists (hallucination detected)",
            {"field": field, "value": value, "violations": len(violations)},
        )
    return Digest.model_validate(draft.model_dump())
