"""
Data Models
"""
from .schemas import (
    SourceType,
    VideoCandidate,
    ArticleCandidate,
    CandidateSet,
    VideoPick,
    ArticlePick,
    Section,
    DigestDraft,
    Digest,
    PipelineErrorKind,
    PipelineError,
    DigestResult,
    DigestRequest,
)

__all__ = [
    "SourceType",
    "VideoCandidate",
    "ArticleCandidate",
    "CandidateSet",
    "VideoPick",
    "ArticlePick",
    "Section",
    "DigestDraft",
    "Digest",
    "PipelineErrorKind",
    "PipelineError",
    "DigestResult",
    "DigestRequest",
]
