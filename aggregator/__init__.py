"""
Aggregator Module
"""
from .data_aggregator import DataAggregator, RawPools, SourceOutcome, default_scrapers

__all__ = [
    "DataAggregator",
    "RawPools",
    "SourceOutcome",
    "default_scrapers",
]
