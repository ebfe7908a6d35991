"""Digest pipeline stages."""

from pipeline.filters import build_candidate_set, filter_articles, filter_candidates, filter_videos
from pipeline.imagery import ImageAugmenter
from pipeline.provenance import validate_selection
from pipeline.runtime import DigestPipeline, build_pipeline, run
from pipeline.selection import SelectionEngine, build_prompt, parse_selection

__all__ = [
    "build_candidate_set",
    "filter_articles",
    "filter_candidates",
    "filter_videos",
    "ImageAugmenter",
    "validate_selection",
    "DigestPipeline",
    "build_pipeline",
    "run",
    "SelectionEngine",
    "build_prompt",
    "parse_selection",
]
