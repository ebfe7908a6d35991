"""
Settings Configuration
Pydantic-validated configuration, read once from the environment
"""
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class YouTubeSettings(BaseSettings):
    """YouTube Data API configuration"""
    api_key: Optional[str] = Field(default=None, description="YouTube Data API v3 key (required)")
    max_results: int = Field(default=15, description="Results requested per search")
    relevance_language: str = Field(default="en", description="Result language restriction")
    safe_search: str = Field(default="moderate", description="Safe-search level")

    class Config:
        env_prefix = "YOUTUBE_"


class GooglePSESettings(BaseSettings):
    """Google Programmable Search configuration (web + news)"""
    api_key: Optional[str] = Field(default=None, description="Custom Search API key (required)")
    cx: Optional[str] = Field(default=None, description="Search engine identifier (required)")
    web_max_results: int = Field(default=10, description="Web results per search")
    news_max_results: int = Field(default=5, description="News results per search")

    class Config:
        env_prefix = "GOOGLE_PSE_"


class TorSearchSettings(BaseSettings):
    """Ahmia (clearnet front-end for onion services) configuration"""
    search_url: str = Field(default="https://ahmia.fi/search/", description="Ahmia search page")
    max_results: int = Field(default=5, description="Maximum onion results")

    class Config:
        env_prefix = "TOR_"


class ArxivSettings(BaseSettings):
    """ArXiv API configuration"""
    max_results: int = Field(default=5, description="Maximum papers per search")
    summary_chars: int = Field(default=200, description="Abstract truncation length")

    class Config:
        env_prefix = "ARXIV_"


class GitHubSettings(BaseSettings):
    """GitHub API configuration"""
    token: Optional[str] = Field(default=None, description="GitHub token (optional, raises rate limit)")
    max_results: int = Field(default=5, description="Maximum repositories per search")

    class Config:
        env_prefix = "GITHUB_"


class GeminiSettings(BaseSettings):
    """Selection oracle (Google Gemini) configuration"""
    api_key: Optional[str] = Field(default=None, description="Google Gemini API key (required)")
    model_name: str = Field(default="gemini-2.5-flash", description="Model name")
    temperature: float = Field(default=0.3, description="Sampling temperature")
    max_tokens: int = Field(default=8192, description="Maximum output tokens")

    class Config:
        env_prefix = "GEMINI_"


class ImageSettings(BaseSettings):
    """Section illustration locator configuration"""
    base_url: str = Field(default="https://image.pollinations.ai", description="Image generation endpoint")
    width: int = Field(default=1024, description="Image width")
    height: int = Field(default=600, description="Image height")

    class Config:
        env_prefix = "IMAGE_"


class GeneralSettings(BaseSettings):
    """General settings"""
    request_timeout: int = Field(default=30, description="HTTP timeout per provider call (seconds)")
    user_agent: str = Field(
        default="Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36",
        description="User-Agent for markup scraping",
    )


class Settings(BaseSettings):
    """Root configuration aggregating every group"""

    youtube: YouTubeSettings = Field(default_factory=YouTubeSettings)
    google_pse: GooglePSESettings = Field(default_factory=GooglePSESettings)
    tor: TorSearchSettings = Field(default_factory=TorSearchSettings)
    arxiv: ArxivSettings = Field(default_factory=ArxivSettings)
    github: GitHubSettings = Field(default_factory=GitHubSettings)
    gemini: GeminiSettings = Field(default_factory=GeminiSettings)
    image: ImageSettings = Field(default_factory=ImageSettings)
    general: GeneralSettings = Field(default_factory=GeneralSettings)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @classmethod
    def load_from_env_file(cls, env_path: Optional[Path] = None) -> "Settings":
        """Load settings, reading ``config/.env`` first when present"""
        if env_path is None:
            env_path = Path(__file__).parent / ".env"

        if env_path.exists():
            from dotenv import load_dotenv
            load_dotenv(env_path)

        return cls(
            youtube=YouTubeSettings(),
            google_pse=GooglePSESettings(),
            tor=TorSearchSettings(),
            arxiv=ArxivSettings(),
            github=GitHubSettings(),
            gemini=GeminiSettings(),
            image=ImageSettings(),
            general=GeneralSettings(),
        )


@lru_cache()
def get_settings() -> Settings:
    """Process-wide settings singleton (read-only after start)"""
    return Settings.load_from_env_file()
