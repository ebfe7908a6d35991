"""
Utils Module
Logging and error types shared by every stage
"""
from .logger import setup_logger
from .exceptions import (
    DigestError,
    ConfigurationError,
    ScraperError,
    InvalidRequestError,
    NoRelevantCandidatesError,
    SelectionMalformedError,
    SelectionHallucinatedError,
    LLMError,
)

__all__ = [
    "setup_logger",
    "DigestError",
    "ConfigurationError",
    "ScraperError",
    "InvalidRequestError",
    "NoRelevantCandidatesError",
    "SelectionMalformedError",
    "SelectionHallucinatedError",
    "LLMError",
]
