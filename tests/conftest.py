# ABOUTME: Pytest fixtures and configuration for reddit-fire tests.
# ABOUTME: Provides test settings, sample posts and listings, and mocked HTTP clients.

from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import httpx
import pytest
import structlog

from reddit_fire.config import Settings
from reddit_fire.models import Post, Subreddit


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Undo CLI logging setup so no test writes to a closed capture stream."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def mock_settings(tmp_path: Path) -> Settings:
    """Create settings for testing."""
    return Settings(
        config_path=tmp_path / "fire.json",
        timeout=2.0,
        request_timeout=1.0,
        base_url="https://reddit.test",
        user_agent="reddit-fire-tests",
        host="127.0.0.1",
        port=17001,
        log_level="DEBUG",
    )


def make_listing(*posts: dict[str, Any]) -> dict[str, Any]:
    """Wrap post dicts in the reddit listing envelope."""
    return {
        "kind": "Listing",
        "data": {"children": [{"kind": "t3", "data": post} for post in posts]},
    }


def make_post(title: str, score: int, **extra: Any) -> dict[str, Any]:
    """Build a raw reddit post dict as found in a listing."""
    post = {
        "title": title,
        "author": "someone",
        "url": f"https://example.com/{title.lower().replace(' ', '-')}",
        "permalink": f"/r/python/comments/abc/{title.lower().replace(' ', '_')}/",
        "score": score,
        "num_comments": 3,
    }
    post.update(extra)
    return post


@pytest.fixture
def sample_listing() -> dict[str, Any]:
    """Listing with a mix of posts above and below a threshold of 100."""
    return make_listing(
        make_post("First Hot Post", 250),
        make_post("Lukewarm Post", 40),
        make_post("Second Hot Post", 100),
        make_post("Cold Post", 3),
        make_post("Third Hot Post", 1200),
    )


@pytest.fixture
def sample_post() -> Post:
    """Create a sample Post for testing."""
    return Post(
        title="A cat picture",
        author="catperson",
        url="https://i.example.com/cat.JPG",
        permalink="/r/cats/comments/xyz/a_cat_picture/",
        score=512,
    )


@pytest.fixture
def sample_feeds() -> list[Subreddit]:
    """Create a configured feed list."""
    return [
        Subreddit(name="python", threshold=100),
        Subreddit(name="golang", threshold=50),
    ]


@pytest.fixture
def client_factory() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.AsyncClient]:
    """Build AsyncClients whose requests are answered by a handler function."""

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory
