"""
GitHub Scraper
Popular repositories from the GitHub search API
"""
from itertools import islice
from typing import Any, List, Optional
import logging

from github import Auth, Github, GithubException

from .base import BaseScraper
from config import Settings
from models import ArticleCandidate, SourceType


logger = logging.getLogger(__name__)


class GitHubScraper(BaseScraper[ArticleCandidate]):
    """
    GitHub repository search
    Uses PyGithub; works unauthenticated with a stricter rate limit
    """

    def __init__(self, settings: Optional[Settings] = None):
        super().__init__(settings)
        self._github_settings = self.settings.github
        self._github = None

    @property
    def source_type(self) -> SourceType:
        return SourceType.GITHUB

    @property
    def name(self) -> str:
        return "GitHub"

    def _get_github(self) -> Github:
        """Lazily build the GitHub client"""
        if self._github is None:
            kwargs = {
                "per_page": self._github_settings.max_results,
                "timeout": self.settings.general.request_timeout,
                "retry": None,
            }
            if self._github_settings.token:
                kwargs["auth"] = Auth.Token(self._github_settings.token)
            self._github = Github(**kwargs)
        return self._github

    async def search(self, query: str) -> List[ArticleCandidate]:
        """
        Search repositories sorted by stars, descending

        Args:
            query: search keywords

        Returns:
            At most ``github.max_results`` repositories; empty on failure or rate limit
        """
        max_results = self._github_settings.max_results

        logger.info(f"[GitHub] Searching repos: {query}")

        try:
            results = await self._run_blocking(
                self._sync_search_repos,
                query,
                max_results,
                "stars",
                "desc",
            )
        except (GithubException, OSError) as e:
            self._log_error(f"Search failed for '{query}'", e)
            return []

        repos = [self._convert_to_article(r) for r in results]
        self._log_search(query, len(repos))
        return repos

    def _sync_search_repos(
        self,
        query: str,
        max_results: int,
        sort: str,
        order: str,
    ) -> list:
        github = self._get_github()

        repos = github.search_repositories(
            query=query,
            sort=sort,
            order=order,
        )

        # PaginatedList slicing can raise at page boundaries; iterate instead
        return list(islice(repos, max_results))

    def _convert_to_article(self, repo: Any) -> ArticleCandidate:
        description = getattr(repo, "description", None)
        return ArticleCandidate(
            title=f"[GitHub] {repo.full_name}",
            url=repo.html_url,
            source=f"GitHub ({repo.stargazers_count} stars)",
            snippet=description or "No description available.",
            source_type=SourceType.GITHUB,
        )
