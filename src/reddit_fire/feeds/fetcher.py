# ABOUTME: Async fetcher for subreddit hot listings.
# ABOUTME: Uses httpx for the request and pydantic for listing decoding and validation.

import httpx
import structlog
from pydantic import ValidationError

from reddit_fire.config import Settings, get_settings
from reddit_fire.models import FetchResult, Listing, Subreddit

log = structlog.get_logger()


class SubredditFetcher:
    """Fetches one subreddit listing per call and filters it by score."""

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-initialized HTTP client shared by every fetch of a run."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.settings.request_timeout,
                headers={"User-Agent": self.settings.user_agent},
                follow_redirects=True,
            )
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "SubredditFetcher":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def fetch(self, subreddit: Subreddit) -> FetchResult:
        """Fetch the hot listing of a subreddit and keep posts above its threshold.

        Failures never propagate: network errors, non-200 responses, and
        undecodable payloads come back as a failed FetchResult.

        Args:
            subreddit: Feed to fetch.

        Returns:
            FetchResult with the retained posts in listing order, or an error.
        """
        url = subreddit.json_url(self.settings.base_url)
        log.debug("fetching_feed", name=subreddit.name, url=url)

        try:
            response = await self.client.get(url)
        except httpx.HTTPError as e:
            log.error("feed_fetch_failed", name=subreddit.name, error=str(e))
            return FetchResult(name=subreddit.name, error=f"error fetching: {e}")

        if response.status_code != httpx.codes.OK:
            log.error("feed_bad_status", name=subreddit.name, status=response.status_code)
            return FetchResult(
                name=subreddit.name,
                error=f"status not OK: {response.status_code}",
            )

        try:
            listing = Listing.model_validate_json(response.content)
        except ValidationError as e:
            log.error(
                "feed_decode_failed", name=subreddit.name, errors=e.error_count()
            )
            return FetchResult(
                name=subreddit.name,
                error=f"error decoding JSON: {e.error_count()} validation error(s)",
            )

        posts = [post for post in listing.posts if post.score >= subreddit.threshold]

        log.info(
            "feed_fetched",
            name=subreddit.name,
            received=len(listing.posts),
            kept=len(posts),
            threshold=subreddit.threshold,
        )
        return FetchResult(name=subreddit.name, posts=posts)
