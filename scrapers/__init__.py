"""
Scrapers Module
One adapter per external provider
"""
from .base import BaseScraper, extract_domain
from .youtube_scraper import YouTubeScraper
from .web_search_scraper import WebSearchScraper, NewsSearchScraper
from .tor_scraper import TorSearchScraper
from .arxiv_scraper import ArxivScraper
from .github_scraper import GitHubScraper

__all__ = [
    "BaseScraper",
    "extract_domain",
    "YouTubeScraper",
    "WebSearchScraper",
    "NewsSearchScraper",
    "TorSearchScraper",
    "ArxivScraper",
    "GitHubScraper",
]
