# ABOUTME: Feed fetching module for subreddit hot listings.
# ABOUTME: Handles the HTTP request, JSON decoding, and score filtering.

from reddit_fire.feeds.fetcher import SubredditFetcher

__all__ = ["SubredditFetcher"]
