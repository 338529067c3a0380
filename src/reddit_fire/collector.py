# ABOUTME: Concurrent collector that fetches every feed and gathers results under one deadline.
# ABOUTME: Tolerates partial completion: feeds still pending at the deadline stay empty.

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

import structlog

from reddit_fire.models import FetchResult, Subreddit

log = structlog.get_logger()

FetchFunc = Callable[[Subreddit], Awaitable[FetchResult]]


@dataclass
class CollectionRun:
    """Feeds of one invocation and the results received before the deadline."""

    feeds: list[Subreddit]
    results: dict[str, FetchResult] = field(default_factory=dict)
    timed_out: bool = False
    elapsed: float = 0.0

    @property
    def pending(self) -> list[str]:
        """Names of feeds whose result never arrived."""
        return [feed.name for feed in self.feeds if feed.name not in self.results]

    def merged(self) -> list[Subreddit]:
        """Apply received results to the feeds, in configuration order.

        Feeds without a result are returned unchanged: no entries and no
        failure marker.
        """
        merged = []
        for feed in self.feeds:
            result = self.results.get(feed.name)
            merged.append(result.apply_to(feed) if result is not None else feed)
        return merged


class FeedCollector:
    """Runs one fetch task per feed and collects their results.

    Every task reports exactly once on a shared queue, success or failure.
    The collector reads until it has one result per feed or until the
    deadline passes. Tasks still running at the deadline are not cancelled;
    their results are simply never read.
    """

    def __init__(self, fetch: FetchFunc, timeout: float) -> None:
        self.fetch = fetch
        self.timeout = timeout
        self._tasks: set[asyncio.Task[None]] = set()

    async def _run_one(self, feed: Subreddit, queue: asyncio.Queue[FetchResult]) -> None:
        try:
            result = await self.fetch(feed)
        except Exception as e:
            log.exception("feed_fetch_crashed", name=feed.name)
            result = FetchResult(name=feed.name, error=f"unexpected error: {e}")
        queue.put_nowait(result)

    async def collect(self, feeds: list[Subreddit]) -> CollectionRun:
        """Fetch all feeds concurrently and wait for them, bounded by the timeout.

        Args:
            feeds: Feeds to fetch. Names must be unique.

        Returns:
            CollectionRun with every result received before the deadline.
        """
        loop = asyncio.get_running_loop()
        started = loop.time()
        deadline = started + self.timeout if self.timeout > 0 else None

        queue: asyncio.Queue[FetchResult] = asyncio.Queue()
        run = CollectionRun(feeds=list(feeds))

        for feed in feeds:
            task = asyncio.create_task(self._run_one(feed, queue))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)

        log.debug("collection_started", feeds=len(feeds), timeout=self.timeout)

        while len(run.results) < len(feeds):
            remaining = None if deadline is None else deadline - loop.time()
            if remaining is not None and remaining <= 0:
                run.timed_out = True
                break
            try:
                result = await asyncio.wait_for(queue.get(), timeout=remaining)
            except TimeoutError:
                run.timed_out = True
                break
            run.results[result.name] = result

        run.elapsed = loop.time() - started

        if run.timed_out:
            log.warning(
                "collection_timeout",
                timeout=self.timeout,
                received=len(run.results),
                pending=run.pending,
            )
        else:
            log.info(
                "collection_complete",
                feeds=len(feeds),
                failed=sum(1 for r in run.results.values() if r.failed),
                elapsed=round(run.elapsed, 3),
            )

        return run
