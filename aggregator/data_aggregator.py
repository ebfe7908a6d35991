"""
Data Aggregator
Concurrent fan-out to every provider adapter with per-source failure isolation
"""
import asyncio
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple, Union
import logging

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from config import Settings, get_settings
from models import ArticleCandidate, SourceType, VideoCandidate
from scrapers import (
    ArxivScraper,
    BaseScraper,
    GitHubScraper,
    NewsSearchScraper,
    TorSearchScraper,
    WebSearchScraper,
    YouTubeScraper,
)
from utils.exceptions import ConfigurationError


logger = logging.getLogger(__name__)
console = Console(stderr=True)

Candidate = Union[VideoCandidate, ArticleCandidate]

VIDEO_SOURCES = frozenset({SourceType.YOUTUBE})


@dataclass
class SourceOutcome:
    """Result-or-error of one adapter call"""
    name: str
    source_type: SourceType
    items: List[Candidate] = field(default_factory=list)
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class RawPools:
    """Unfiltered pools after the fan-in"""
    videos: List[VideoCandidate]
    articles: List[ArticleCandidate]
    outcomes: Tuple[SourceOutcome, ...]

    @property
    def failed_sources(self) -> List[str]:
        return [outcome.name for outcome in self.outcomes if not outcome.ok]


def default_scrapers(settings: Optional[Settings] = None) -> List[BaseScraper]:
    """The six adapters in pool order: video first, then web, tor, news, arxiv, github"""
    settings = settings or get_settings()
    return [
        YouTubeScraper(settings),
        WebSearchScraper(settings),
        TorSearchScraper(settings),
        NewsSearchScraper(settings),
        ArxivScraper(settings),
        GitHubScraper(settings),
    ]


class DataAggregator:
    """
    Fetch orchestrator

    Every adapter runs as an independent task; the join waits for all of them.
    A failing adapter contributes an empty result and never aborts the others.
    """

    def __init__(self, scrapers: Optional[Sequence[BaseScraper]] = None, settings: Optional[Settings] = None):
        self._scrapers: List[BaseScraper] = list(scrapers) if scrapers is not None else default_scrapers(settings)

    async def _run_source_task(self, scraper: BaseScraper, topic: str) -> SourceOutcome:
        try:
            items = await scraper.search(topic)
        except ConfigurationError as exc:
            logger.error(f"{scraper.name} source misconfigured: {exc}")
            return SourceOutcome(name=scraper.name, source_type=scraper.source_type, error=exc)
        except Exception as exc:
            logger.warning(f"{scraper.name} source unavailable: {exc}")
            return SourceOutcome(name=scraper.name, source_type=scraper.source_type, error=exc)
        return SourceOutcome(name=scraper.name, source_type=scraper.source_type, items=list(items or []))

    async def gather(self, topic: str, show_progress: bool = False) -> RawPools:
        """
        Query every adapter concurrently and build the raw pools

        Args:
            topic: search topic
            show_progress: render a spinner and a summary table (CLI use)

        Returns:
            RawPools with one video pool and the concatenated article pool
        """
        tasks = [self._run_source_task(scraper, topic) for scraper in self._scrapers]

        if show_progress:
            console.print(f"\n🔍 [bold blue]Searching for:[/bold blue] {topic}\n")
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                console=console,
            ) as progress:
                task = progress.add_task(
                    f"[cyan]Fetching from {len(tasks)} sources...",
                    total=None,
                )
                outcomes = await asyncio.gather(*tasks)
                progress.update(task, completed=True)
        else:
            outcomes = await asyncio.gather(*tasks)

        pools = self._merge(tuple(outcomes))

        logger.info(
            "Fetched %d videos, %d articles (%s)",
            len(pools.videos),
            len(pools.articles),
            ", ".join(f"{o.name}={len(o.items)}" for o in pools.outcomes),
        )
        if show_progress:
            self._print_summary(pools)

        return pools

    @staticmethod
    def _merge(outcomes: Tuple[SourceOutcome, ...]) -> RawPools:
        videos: List[VideoCandidate] = []
        articles: List[ArticleCandidate] = []
        for outcome in outcomes:
            if outcome.source_type in VIDEO_SOURCES:
                videos.extend(outcome.items)
            else:
                articles.extend(outcome.items)
        return RawPools(videos=videos, articles=articles, outcomes=outcomes)

    def _print_summary(self, pools: RawPools):
        console.print()

        table = Table(title="📊 Fetch Summary", show_header=True)
        table.add_column("Source", style="cyan")
        table.add_column("Type", style="magenta")
        table.add_column("Count", justify="right", style="green")
        table.add_column("Status")

        for outcome in pools.outcomes:
            kind = "Videos" if outcome.source_type in VIDEO_SOURCES else "Articles"
            status = "[green]ok[/green]" if outcome.ok else f"[red]{outcome.error}[/red]"
            table.add_row(outcome.name, kind, str(len(outcome.items)), status)

        table.add_row("", "", "", "")
        table.add_row("[bold]Total[/bold]", "", f"[bold]{len(pools.videos) + len(pools.articles)}[/bold]", "")

        console.print(table)
        console.print()

    async def close(self):
        """Close every adapter"""
        for scraper in self._scrapers:
            await scraper.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
