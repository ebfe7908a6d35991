"""CLI entrypoint for the topic digest pipeline."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from aggregator import DataAggregator
from models import CandidateSet, Digest, DigestResult
from pipeline import build_candidate_set, run
from utils.logger import setup_logger


console = Console()


def _print_digest(digest: Digest) -> None:
    console.print(Panel(digest.summary, title=f"[bold]{digest.topic}[/bold]", expand=False))
    for idx, section in enumerate(digest.sections, 1):
        console.print(f"\n[bold cyan]{idx}. {section.title}[/bold cyan]")
        console.print(f"[italic]{section.importance}[/italic]")
        console.print(section.overview)
        if section.youtube.video_id:
            console.print(
                f"  ▶ {section.youtube.title} ({section.youtube.channel}) "
                f"https://www.youtube.com/watch?v={section.youtube.video_id}"
            )
            console.print(f"    {section.youtube.reason}")
        if section.article.url:
            console.print(f"  📄 {section.article.source}: {section.article.url}")
            console.print(f"    {section.article.note}")
        if section.image_url:
            console.print(f"  🖼  {section.image_url}")


def _print_candidates(candidates: CandidateSet) -> None:
    videos = Table(title="Video candidates", show_header=True)
    videos.add_column("videoId", style="cyan")
    videos.add_column("Channel", style="magenta")
    videos.add_column("Title")
    for video in candidates.videos:
        videos.add_row(video.video_id, video.channel_title, video.title)

    articles = Table(title="Article candidates", show_header=True)
    articles.add_column("Source", style="magenta")
    articles.add_column("Title")
    articles.add_column("URL", style="cyan")
    for article in candidates.articles:
        articles.add_row(article.source, article.title, article.url)

    console.print(videos)
    console.print(articles)


async def _collect(topic: str) -> CandidateSet:
    async with DataAggregator() as aggregator:
        pools = await aggregator.gather(topic, show_progress=True)
    return build_candidate_set(pools.videos, pools.articles, topic)


def main() -> None:
    parser = argparse.ArgumentParser(description="Deep Dive Digest CLI")
    parser.add_argument("--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    digest = sub.add_parser("digest", help="build a three-section digest for a topic")
    digest.add_argument("--topic", required=True)
    digest.add_argument("--lang", choices=["en", "tr"], default="tr")
    digest.add_argument("--json", action="store_true", help="print the raw DigestResult JSON")

    cands = sub.add_parser("candidates", help="fetch and filter candidates without selection")
    cands.add_argument("--topic", required=True)

    args = parser.parse_args()
    setup_logger(level=logging.DEBUG if args.verbose else logging.INFO)

    if args.command == "candidates":
        _print_candidates(asyncio.run(_collect(args.topic)))
        return

    result: DigestResult = asyncio.run(run(args.topic, args.lang))
    if args.json:
        print(json.dumps(result.model_dump(mode="json", by_alias=True), ensure_ascii=False, indent=2))
    elif result.success and result.data is not None:
        _print_digest(result.data)
    else:
        console.print(f"[bold red]{result.error.type.value}[/bold red]: {result.error.message}")

    if not result.success:
        sys.exit(1)


if __name__ == "__main__":
    main()
