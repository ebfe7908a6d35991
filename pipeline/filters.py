"""Deterministic candidate filtering: completeness, clickbait, relevance, diversity."""

from __future__ import annotations

from dataclasses import dataclass, field
import re
from typing import Callable, List, Sequence, Set, Tuple, TypeVar, Union

from models import ArticleCandidate, CandidateSet, VideoCandidate


C = TypeVar("C", VideoCandidate, ArticleCandidate)
Candidate = Union[VideoCandidate, ArticleCandidate]

# Whole-title capitals is case-sensitive; the markers are not.
_ALL_CAPS_RE = re.compile(r"^[A-Z\s!?]{10,}$")
_CLICKBAIT_MARKERS = (
    re.compile(r"shocking", re.IGNORECASE),
    re.compile(r"you won't believe", re.IGNORECASE),
    re.compile(r"mind blown", re.IGNORECASE),
    re.compile(r"\d+\s*(secrets|tricks|hacks)", re.IGNORECASE),
    re.compile(r"watch before", re.IGNORECASE),
    re.compile(r"deleted soon", re.IGNORECASE),
    re.compile(r"exposed", re.IGNORECASE),
)
_MIN_TERM_LEN = 3


def is_clickbait(title: str) -> bool:
    text = str(title or "")
    if _ALL_CAPS_RE.match(text):
        return True
    return any(pattern.search(text) for pattern in _CLICKBAIT_MARKERS)


def topic_terms(topic: str) -> List[str]:
    """Lower-cased whitespace tokens longer than two characters."""
    return [token for token in str(topic or "").lower().split() if len(token) >= _MIN_TERM_LEN]


@dataclass
class FilterContext:
    """Per-pool state shared by the rules of one filtering pass."""

    terms: List[str]
    seen_keys: Set[str] = field(default_factory=set)

    @classmethod
    def for_topic(cls, topic: str) -> "FilterContext":
        return cls(terms=topic_terms(topic))


Rule = Callable[[Candidate, FilterContext], bool]


def has_identity(candidate: Candidate, ctx: FilterContext) -> bool:
    return bool(candidate.key) and bool(candidate.title)


def not_clickbait(candidate: Candidate, ctx: FilterContext) -> bool:
    return not is_clickbait(candidate.title)


def is_relevant(candidate: Candidate, ctx: FilterContext) -> bool:
    # A topic made only of short words has no terms and admits everything.
    if not ctx.terms:
        return True
    text = candidate.relevance_text.lower()
    return any(term in text for term in ctx.terms)


def is_diverse(candidate: Candidate, ctx: FilterContext) -> bool:
    """First-seen-wins per channel/source; must stay the last rule."""
    key = candidate.diversity_key
    if key in ctx.seen_keys:
        return False
    ctx.seen_keys.add(key)
    return True


RULES: Tuple[Tuple[str, Rule], ...] = (
    ("completeness", has_identity),
    ("clickbait", not_clickbait),
    ("relevance", is_relevant),
    ("diversity", is_diverse),
)


def rejection_reason(candidate: Candidate, ctx: FilterContext) -> str | None:
    """Name of the first failing rule, or None when the candidate survives."""
    for name, rule in RULES:
        if not rule(candidate, ctx):
            return name
    return None


def filter_candidates(pool: Sequence[C], topic: str) -> List[C]:
    """Order-preserving, idempotent filter over one pool."""
    ctx = FilterContext.for_topic(topic)
    return [candidate for candidate in pool if rejection_reason(candidate, ctx) is None]


def filter_videos(pool: Sequence[VideoCandidate], topic: str) -> List[VideoCandidate]:
    return filter_candidates(pool, topic)


def filter_articles(pool: Sequence[ArticleCandidate], topic: str) -> List[ArticleCandidate]:
    return filter_candidates(pool, topic)


def build_candidate_set(
    videos: Sequence[VideoCandidate],
    articles: Sequence[ArticleCandidate],
    topic: str,
) -> CandidateSet:
    return CandidateSet(
        videos=filter_videos(videos, topic),
        articles=filter_articles(articles, topic),
    )
