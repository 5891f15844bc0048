"""Content fetching layer for RSS feeds."""

from .rss import RSSItem, fetch_rss_entries, parse_feed

__all__ = ["RSSItem", "fetch_rss_entries", "parse_feed"]
