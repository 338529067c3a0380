# ABOUTME: JSON renderer for collected feeds.
# ABOUTME: Serializes the final feed list, failures included, as a single JSON array.

from typing import TextIO

from pydantic import TypeAdapter

from reddit_fire.models import Subreddit

FeedList = TypeAdapter(list[Subreddit])


def render_json(feeds: list[Subreddit], stream: TextIO) -> None:
    """Write feeds as a JSON array followed by a newline."""
    stream.write(FeedList.dump_json(feeds).decode("utf-8"))
    stream.write("\n")


def parse_json(content: str | bytes) -> list[Subreddit]:
    """Read back a feed list produced by render_json."""
    return FeedList.validate_json(content)
