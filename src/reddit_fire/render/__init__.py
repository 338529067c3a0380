# ABOUTME: Output renderers for collected feeds: text, JSON, and browser.
# ABOUTME: Dispatches on OutputMode so exactly one renderer handles a run.

import sys
from typing import TextIO

from reddit_fire.config import Settings, get_settings
from reddit_fire.models import OutputMode, Subreddit
from reddit_fire.render.json_output import render_json
from reddit_fire.render.text import render_feed_list, render_text


def render(
    feeds: list[Subreddit],
    mode: OutputMode,
    settings: Settings | None = None,
    stream: TextIO | None = None,
) -> None:
    """Hand the final feed list to the renderer selected by ``mode``."""
    settings = settings or get_settings()
    stream = stream or sys.stdout

    match mode:
        case OutputMode.TEXT:
            render_text(feeds, stream, base_url=settings.base_url)
        case OutputMode.JSON:
            render_json(feeds, stream)
        case OutputMode.BROWSER:
            from reddit_fire.render.browser import serve

            serve(feeds, settings)


__all__ = ["render", "render_feed_list", "render_json", "render_text"]
