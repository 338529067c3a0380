# ABOUTME: Pydantic models for feeds, posts, and reddit listing payloads.
# ABOUTME: Defines Post, Subreddit, FetchResult, FeedConfiguration, and OutputMode.

import html
import re
from enum import Enum

from markupsafe import Markup
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from reddit_fire.config import REDDIT_BASE_URL

IMAGE_EXTENSIONS = ("jpg", "jpeg", "png", "gif")
SUBREDDIT_NAME_RE = re.compile(r"[A-Za-z0-9_+]+")


class OutputMode(str, Enum):
    """How a collection run is presented."""

    TEXT = "text"
    JSON = "json"
    BROWSER = "browser"


class MediaEmbed(BaseModel):
    """Embeddable media block attached to a post."""

    model_config = ConfigDict(extra="ignore")

    content: str = ""


class Post(BaseModel):
    """Single entry from a subreddit listing."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    title: str = ""
    author: str = ""
    url: str = ""
    permalink: str = ""
    score: int
    media_embed: MediaEmbed | None = None

    @property
    def is_image(self) -> bool:
        """Naive image detection based on the URL suffix."""
        return self.url.lower().endswith(IMAGE_EXTENSIONS)

    @property
    def has_embed(self) -> bool:
        return self.media_embed is not None and bool(self.media_embed.content)

    @property
    def embed_html(self) -> Markup:
        """Embed markup with reddit's HTML escaping undone."""
        if not self.has_embed:
            return Markup("")
        return Markup(html.unescape(self.media_embed.content))

    def comments_url(self, base_url: str = REDDIT_BASE_URL) -> str:
        return base_url.rstrip("/") + self.permalink


class ListingChild(BaseModel):
    model_config = ConfigDict(extra="ignore")

    data: Post


class ListingData(BaseModel):
    model_config = ConfigDict(extra="ignore")

    children: list[ListingChild] = []


class Listing(BaseModel):
    """Top-level JSON document returned by /r/{name}/hot.json."""

    model_config = ConfigDict(extra="ignore")

    data: ListingData

    @property
    def posts(self) -> list[Post]:
        return [child.data for child in self.data.children]


class Subreddit(BaseModel):
    """A configured feed: subreddit name plus minimum score threshold.

    Configuration files written by earlier releases use ``Name`` and ``Score``.
    """

    name: str = Field(validation_alias=AliasChoices("name", "Name"))
    threshold: int = Field(validation_alias=AliasChoices("threshold", "Score"))
    entries: list[Post] = Field(default_factory=list)
    fetch_failed: bool = False
    error_message: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        if not SUBREDDIT_NAME_RE.fullmatch(value):
            raise ValueError(f"invalid subreddit name: {value!r}")
        return value

    def json_url(self, base_url: str = REDDIT_BASE_URL) -> str:
        """Build JSON endpoint URL for the hot listing."""
        return f"{base_url.rstrip('/')}/r/{self.name}/hot.json"

    def browse_url(self, base_url: str = REDDIT_BASE_URL) -> str:
        """Build human-readable URL for the hot listing."""
        return f"{base_url.rstrip('/')}/r/{self.name}/hot"


class FetchResult(BaseModel):
    """Outcome of one fetch, passed from a fetcher task to the collector."""

    name: str
    posts: list[Post] = Field(default_factory=list)
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    def apply_to(self, feed: Subreddit) -> Subreddit:
        """Return a copy of ``feed`` carrying this result."""
        return feed.model_copy(
            update={
                "entries": list(self.posts),
                "fetch_failed": self.failed,
                "error_message": self.error,
            }
        )


class FeedConfiguration(BaseModel):
    """Persisted list of feeds, keyed by subreddit name."""

    model_config = ConfigDict(extra="forbid")

    subreddits: list[Subreddit] = Field(
        default_factory=list, validation_alias=AliasChoices("subreddits", "Subreddits")
    )

    def get(self, name: str) -> Subreddit | None:
        for subreddit in self.subreddits:
            if subreddit.name == name:
                return subreddit
        return None

    def upsert(self, name: str, threshold: int) -> Subreddit:
        """Add a feed, or update the threshold of an existing one in place.

        Returns:
            The stored Subreddit.
        """
        existing = self.get(name)
        if existing is not None:
            existing.threshold = threshold
            return existing

        subreddit = Subreddit(name=name, threshold=threshold)
        self.subreddits.append(subreddit)
        return subreddit

    def delete(self, name: str) -> bool:
        """Remove the feed with the given name.

        Returns:
            True if a feed was removed, False if the name was not configured.
        """
        for index, subreddit in enumerate(self.subreddits):
            if subreddit.name == name:
                del self.subreddits[index]
                return True
        return False
