# ABOUTME: Pipeline driver: validate feeds, collect them concurrently, render the result.
# ABOUTME: Owns the fetcher lifecycle and the single asyncio event loop of a run.

import asyncio
from collections import Counter
from typing import TextIO

import structlog

from reddit_fire.collector import CollectionRun, FeedCollector
from reddit_fire.config import ConfigurationError, Settings, get_settings
from reddit_fire.feeds.fetcher import SubredditFetcher
from reddit_fire.models import OutputMode, Subreddit
from reddit_fire.render import render

log = structlog.get_logger()


def validate_feeds(feeds: list[Subreddit]) -> None:
    """Reject feed lists that can't be collected.

    Raises:
        ConfigurationError: If the list is empty or names a subreddit twice.
    """
    if not feeds:
        raise ConfigurationError("no subreddits found")

    duplicates = sorted(name for name, count in Counter(f.name for f in feeds).items() if count > 1)
    if duplicates:
        raise ConfigurationError(f"duplicate subreddits: {', '.join(duplicates)}")


async def collect_feeds(
    feeds: list[Subreddit],
    settings: Settings,
    fetcher: SubredditFetcher | None = None,
) -> CollectionRun:
    """Run one collection over ``feeds`` with the configured timeout."""
    if fetcher is not None:
        return await FeedCollector(fetcher.fetch, settings.timeout).collect(feeds)

    async with SubredditFetcher(settings) as owned:
        return await FeedCollector(owned.fetch, settings.timeout).collect(feeds)


def run_pipeline(
    feeds: list[Subreddit],
    mode: OutputMode = OutputMode.TEXT,
    settings: Settings | None = None,
    fetcher: SubredditFetcher | None = None,
    stream: TextIO | None = None,
) -> list[Subreddit]:
    """Fetch every feed, merge results in configuration order, and render them.

    Args:
        feeds: Feeds to fetch. Must be non-empty with unique names.
        mode: Output mode selecting the renderer.
        settings: Settings for timeouts, base URL, and browser port.
        fetcher: Optional fetcher to use instead of a fresh one.
        stream: Output stream for text and JSON modes. Defaults to stdout.

    Returns:
        The merged feed list handed to the renderer.

    Raises:
        ConfigurationError: If the feed list is empty or has duplicates.
    """
    settings = settings or get_settings()
    validate_feeds(feeds)

    run = asyncio.run(collect_feeds(feeds, settings, fetcher))
    merged = run.merged()

    log.debug("rendering", mode=mode.value, feeds=len(merged), partial=run.timed_out)
    render(merged, mode, settings, stream)
    return merged
