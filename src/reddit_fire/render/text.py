# ABOUTME: Plain text renderer for collected feeds.
# ABOUTME: Prints feed name, browse URL, and score/title/url per post, colored on a terminal.

from typing import TextIO

from rich.console import Console
from rich.text import Text

from reddit_fire.config import REDDIT_BASE_URL
from reddit_fire.models import Subreddit


def _console(stream: TextIO, colors: bool | None) -> Console:
    """Console writing to stream without wrapping or highlighting.

    With colors left as None, rich decides from whether the stream is a terminal.
    """
    if colors is None:
        return Console(file=stream, highlight=False, soft_wrap=True)
    return Console(
        file=stream,
        force_terminal=colors,
        no_color=not colors,
        color_system="standard" if colors else None,
        highlight=False,
        soft_wrap=True,
    )


def render_text(
    feeds: list[Subreddit],
    stream: TextIO,
    base_url: str = REDDIT_BASE_URL,
    colors: bool | None = None,
) -> None:
    """Print collected feeds as text.

    Args:
        feeds: Feeds in configuration order.
        stream: Output stream.
        base_url: Reddit base URL for the browse links.
        colors: Force colors on or off. Defaults to whether stream is a terminal.
    """
    console = _console(stream, colors)

    for feed in feeds:
        header = Text.assemble((feed.name, "yellow"), " ", (feed.browse_url(base_url), "cyan"))
        if feed.fetch_failed:
            header.append(" ")
            header.append(f"[fetch failed: {feed.error_message}]", style="red")
        console.print(header)

        for post in feed.entries:
            console.print(
                Text.assemble((str(post.score), "green"), f" {post.title} ", (post.url, "magenta"))
            )


def render_feed_list(feeds: list[Subreddit], stream: TextIO, colors: bool | None = None) -> None:
    """Print configured feeds as ``name threshold`` lines."""
    console = _console(stream, colors)

    for feed in feeds:
        console.print(Text.assemble((feed.name, "yellow"), " ", (str(feed.threshold), "green")))
