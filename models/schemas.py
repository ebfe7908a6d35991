"""
Data Models / Schemas
Candidate, selection and digest structures shared by every pipeline stage
"""
from enum import Enum
from typing import Any, List, Literal, Optional, Set

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class SourceType(str, Enum):
    """Provider behind a candidate"""
    YOUTUBE = "youtube"
    WEB = "web"
    TOR = "tor"
    NEWS = "news"
    ARXIV = "arxiv"
    GITHUB = "github"


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


class VideoCandidate(BaseModel):
    """A video search result (YouTube)"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    video_id: str = Field(default="", alias="videoId", description="Provider-assigned video identifier")
    title: str = Field(default="", description="Video title")
    channel_title: str = Field(default="", alias="channelTitle", description="Channel name")
    published_at: str = Field(default="", alias="publishedAt", description="Publish timestamp")
    description: str = Field(default="", description="Video description")

    @field_validator("video_id", "title", "channel_title", "published_at", "description", mode="before")
    @classmethod
    def _default_text(cls, value: Any) -> str:
        return _text(value)

    @property
    def key(self) -> str:
        return self.video_id

    @property
    def relevance_text(self) -> str:
        return f"{self.title} {self.description}"

    @property
    def diversity_key(self) -> str:
        return self.channel_title.strip().lower()


class ArticleCandidate(BaseModel):
    """An article-shaped result (web, news, onion, paper, repository)"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    url: str = Field(default="", description="Canonical link, unique within a pool")
    title: str = Field(default="", description="Title, prefixed with a kind tag for non-web sources")
    source: str = Field(default="", description="Source label (domain or provider annotation)")
    snippet: str = Field(default="", description="Snippet or abstract")
    source_type: SourceType = Field(default=SourceType.WEB, exclude=True, description="Adapter that produced it")

    @field_validator("url", "title", "source", "snippet", mode="before")
    @classmethod
    def _default_text(cls, value: Any) -> str:
        return _text(value)

    @property
    def key(self) -> str:
        return self.url

    @property
    def relevance_text(self) -> str:
        return f"{self.title} {self.snippet}"

    @property
    def diversity_key(self) -> str:
        return self.source.strip().lower()


class CandidateSet(BaseModel):
    """Filtered candidates handed to selection"""
    model_config = ConfigDict(frozen=True)

    videos: List[VideoCandidate] = Field(default_factory=list)
    articles: List[ArticleCandidate] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.videos and not self.articles

    def video_ids(self) -> Set[str]:
        return {video.video_id for video in self.videos}

    def article_urls(self) -> Set[str]:
        return {article.url for article in self.articles}


class VideoPick(BaseModel):
    """Video cited by a section; an empty ``video_id`` cites nothing"""
    model_config = ConfigDict(populate_by_name=True)

    video_id: str = Field(default="", alias="videoId")
    channel: str = ""
    title: str = ""
    reason: str = ""

    # The cited identifier is kept verbatim for the provenance check.
    @field_validator("video_id", mode="before")
    @classmethod
    def _identity(cls, value: Any) -> str:
        return _text(value)

    @field_validator("channel", "title", "reason", mode="before")
    @classmethod
    def _default_text(cls, value: Any) -> str:
        return _text(value).strip()


class ArticlePick(BaseModel):
    """Article cited by a section; an empty ``url`` cites nothing"""
    model_config = ConfigDict(populate_by_name=True)

    url: str = ""
    source: str = ""
    note: str = ""

    @field_validator("url", mode="before")
    @classmethod
    def _identity(cls, value: Any) -> str:
        return _text(value)

    @field_validator("source", "note", mode="before")
    @classmethod
    def _default_text(cls, value: Any) -> str:
        return _text(value).strip()


class Section(BaseModel):
    """One of the three digest sections"""
    model_config = ConfigDict(populate_by_name=True)

    title: str = ""
    importance: str = ""
    overview: str = ""
    image_prompt: str = Field(default="", alias="imagePrompt")
    image_url: str = Field(default="", alias="imageUrl")
    youtube: VideoPick = Field(default_factory=VideoPick)
    article: ArticlePick = Field(default_factory=ArticlePick)

    @field_validator("title", "importance", "overview", "image_prompt", "image_url", mode="before")
    @classmethod
    def _default_text(cls, value: Any) -> str:
        return _text(value)

    @field_validator("youtube", "article", mode="before")
    @classmethod
    def _missing_pick(cls, value: Any) -> Any:
        return {} if value is None else value


class DigestDraft(BaseModel):
    """Parsed oracle output, not yet checked for provenance"""
    model_config = ConfigDict(populate_by_name=True)

    topic: str = ""
    user_level: str = "intermediate"
    summary: str = ""
    sections: List[Section] = Field(default_factory=list)

    @field_validator("topic", "summary", mode="before")
    @classmethod
    def _default_text(cls, value: Any) -> str:
        return _text(value)

    @field_validator("user_level", mode="before")
    @classmethod
    def _level(cls, value: Any) -> str:
        return _text(value) or "intermediate"


class Digest(DigestDraft):
    """Validated digest: exactly three provenance-clean sections"""

    @field_validator("sections")
    @classmethod
    def _three_sections(cls, value: List[Section]) -> List[Section]:
        if len(value) != 3:
            raise ValueError(f"a digest has exactly 3 sections, got {len(value)}")
        return value


class PipelineErrorKind(str, Enum):
    """Error taxonomy surfaced to callers"""
    SOURCE_UNAVAILABLE = "source-unavailable"
    NO_RELEVANT_CANDIDATES = "no-relevant-candidates"
    SELECTION_MALFORMED = "selection-malformed"
    SELECTION_HALLUCINATED = "selection-hallucinated"
    SELECTION_UNAVAILABLE = "selection-unavailable"
    CONFIGURATION_ERROR = "configuration-error"
    INVALID_REQUEST = "invalid-request"


class PipelineError(BaseModel):
    """Terminal error for one request"""
    type: PipelineErrorKind
    message: str


class DigestResult(BaseModel):
    """Either a full digest or an error, never both"""
    success: bool
    data: Optional[Digest] = None
    error: Optional[PipelineError] = None

    @model_validator(mode="after")
    def _exclusive(self) -> "DigestResult":
        if self.success and (self.data is None or self.error is not None):
            raise ValueError("a successful result carries a digest and no error")
        if not self.success and (self.error is None or self.data is not None):
            raise ValueError("a failed result carries an error and no digest")
        return self

    @classmethod
    def ok(cls, digest: Digest) -> "DigestResult":
        return cls(success=True, data=digest)

    @classmethod
    def fail(cls, error: PipelineError) -> "DigestResult":
        return cls(success=False, error=error)


class DigestRequest(BaseModel):
    """Topic + content language of one pipeline run"""
    topic: str
    lang: Literal["en", "tr"] = "tr"

    @field_validator("topic", mode="before")
    @classmethod
    def _non_empty_topic(cls, value: Any) -> str:
        text = _text(value).strip()
        if not text:
            raise ValueError("topic is required")
        return text
