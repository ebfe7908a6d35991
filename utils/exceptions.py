"""
Custom Exceptions
Pipeline error hierarchy, each tagged with the error kind reported to callers
"""
from models import PipelineError, PipelineErrorKind


class DigestError(Exception):
    """Base class for every pipeline failure"""

    kind: PipelineErrorKind = PipelineErrorKind.SOURCE_UNAVAILABLE

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self):
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message

    def to_pipeline_error(self) -> PipelineError:
        return PipelineError(type=self.kind, message=self.message)


class ConfigurationError(DigestError):
    """A required credential or setting is missing"""
    kind = PipelineErrorKind.CONFIGURATION_ERROR


class ScraperError(DigestError):
    """A provider adapter could not deliver results"""
    kind = PipelineErrorKind.SOURCE_UNAVAILABLE

    def __init__(self, message: str, source: str = None, **kwargs):
        super().__init__(message, kwargs)
        self.source = source


class InvalidRequestError(DigestError):
    """The topic or language of a request is unusable"""
    kind = PipelineErrorKind.INVALID_REQUEST


class NoRelevantCandidatesError(DigestError):
    """Both candidate pools are empty after filtering"""
    kind = PipelineErrorKind.NO_RELEVANT_CANDIDATES


class SelectionMalformedError(DigestError):
    """The oracle response is not a three-section digest"""
    kind = PipelineErrorKind.SELECTION_MALFORMED


class SelectionHallucinatedError(DigestError):
    """The oracle cited a resource outside the supplied candidates"""
    kind = PipelineErrorKind.SELECTION_HALLUCINATED


class LLMError(DigestError):
    """LLM call failed or returned nothing"""
    kind = PipelineErrorKind.SELECTION_UNAVAILABLE

    def __init__(self, message: str, provider: str = None, **kwargs):
        super().__init__(message, kwargs)
        self.provider = provider
