# ABOUTME: Main package for reddit-fire, a score-filtered subreddit reader.
# ABOUTME: Exports settings, models, and the collection pipeline.

from reddit_fire.config import ConfigurationError, get_settings
from reddit_fire.models import FeedConfiguration, OutputMode, Post, Subreddit
from reddit_fire.pipeline import run_pipeline

__all__ = [
    "get_settings",
    "ConfigurationError",
    "FeedConfiguration",
    "OutputMode",
    "Post",
    "Subreddit",
    "run_pipeline",
]
