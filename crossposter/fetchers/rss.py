from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

import feedparser
import requests

from ..errors import RemoteRejected, RemoteRequestFailed
from ..utils.http import hint_for_status
from ..utils.logging import get_logger

logger = get_logger("crossposter.fetchers.rss")


@dataclass(slots=True)
class RSSItem:
    guid: str
    title: str
    link: str
    published: Optional[datetime]
    tags: List[str] = field(default_factory=list)


def _parse_datetime(entry: dict) -> Optional[datetime]:
    # feedparser may provide 'published_parsed' or 'updated_parsed'
    for key in ("published_parsed", "updated_parsed"):
        tm = entry.get(key)
        if tm:
            try:
                return datetime(*tm[:6])
            except (TypeError, ValueError):
                return None
    return None


def parse_feed(content: bytes | str) -> List[RSSItem]:
    parsed = feedparser.parse(content)
    if getattr(parsed, "bozo", False):
        # feedparser sets bozo when it encounters a feed error but may still parse entries
        logger.debug("Feed 'bozo' flagged: %s", getattr(parsed, "bozo_exception", None))

    items: List[RSSItem] = []
    for entry in getattr(parsed, "entries", []) or []:
        link = entry.get("link") or ""
        items.append(
            RSSItem(
                guid=entry.get("id") or link,
                title=entry.get("title") or "",
                link=link,
                published=_parse_datetime(entry),
                tags=[t.get("term") for t in entry.get("tags") or [] if t.get("term")],
            )
        )
    return items


def fetch_rss_entries(
    url: str,
    *,
    session: Optional[requests.Session] = None,
    platform: str = "RSS",
    headers: Optional[dict] = None,
    timeout: float = 30,
) -> List[RSSItem]:
    """Fetch and parse RSS/Atom feed entries.

    The request is made once with ``requests`` for consistent timeouts and
    headers; the body is then parsed by ``feedparser``.
    """
    http = session or requests.Session()
    logger.debug("Fetching RSS from %s", url)
    try:
        resp = http.get(url, headers=headers or {}, timeout=timeout)
    except requests.RequestException as exc:
        logger.warning("RSS request error for %s: %s", url, exc)
        raise RemoteRequestFailed(platform, f"feed request to {url} failed: {exc}") from exc

    if resp.status_code >= 400:
        logger.warning("RSS fetch failed (%s): %s", resp.status_code, url)
        raise RemoteRejected(platform, resp.status_code, resp.text or "", hint_for_status(resp.status_code))

    items = parse_feed(resp.content)
    logger.info("Fetched %d RSS entries from %s", len(items), url)
    return items
