from __future__ import annotations

from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

import requests

from ..errors import ConfigError, RemoteRequestFailed, UnsupportedOperation
from ..fetchers.rss import fetch_rss_entries
from ..models import Article, ArticleSummary, ContentFormat, Platform
from ..processors.converter import ensure_title_in_content, markdown_to_html
from ..utils.http import decode_json, send
from ..utils.logging import get_logger
from ..utils.pipeline_config import RuntimeConfig
from .base import PlatformClient

logger = get_logger("crossposter.platforms.medium")

MEDIUM_API_URL = "https://api.medium.com/v1"
MEDIUM_FEED_URL = "https://medium.com/feed/@{username}"

# The RSS feed only ever exposes the most recent posts
MEDIUM_FEED_LIMIT = 10


def _post_id(guid: str) -> str:
    # guids look like https://medium.com/p/1a2b3c4d5e6f
    path = urlparse(guid).path.rstrip("/")
    return path.rsplit("/", 1)[-1] if path else guid


class MediumClient(PlatformClient):
    """Medium API client.

    Medium offers no article fetch endpoint, and listing goes through the
    public RSS feed, so there is no pagination or state filter.

    Environment:
      - MEDIUM_ACCESS_TOKEN (or ``medium.access_token`` in the config file)
      - MEDIUM_USER_ID, MEDIUM_USERNAME (optional; looked up via /me)
    """

    platform = Platform.MEDIUM

    def __init__(
        self,
        *,
        access_token: Optional[str] = None,
        user_id: Optional[str] = None,
        username: Optional[str] = None,
        base_url: str = MEDIUM_API_URL,
        session: Optional[requests.Session] = None,
        runtime: Optional[RuntimeConfig] = None,
        dry_run: bool = False,
    ) -> None:
        if not access_token and not dry_run:
            raise ConfigError(
                "Medium access_token not set (config 'medium.access_token' or env MEDIUM_ACCESS_TOKEN)"
            )
        self.access_token = access_token
        self.user_id = user_id
        self.username = username
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.runtime = runtime or RuntimeConfig()
        self.dry_run = dry_run

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.access_token or ''}",
            "Accept": "application/json",
            "User-Agent": self.runtime.user_agent,
        }

    def _load_me(self) -> None:
        resp = send(
            self.session,
            "GET",
            f"{self.base_url}/me",
            platform=self.platform.display_name,
            headers=self._headers(),
            timeout=self.runtime.http_timeout,
        )
        data = decode_json(resp, platform=self.platform.display_name)
        me = data.get("data") if isinstance(data, dict) else None
        if not isinstance(me, dict) or not me.get("id"):
            raise RemoteRequestFailed(self.platform.display_name, "unexpected /me response")
        self.user_id = self.user_id or me["id"]
        self.username = self.username or me.get("username")

    def get_user_id(self) -> str:
        if not self.user_id:
            self._load_me()
        return self.user_id  # type: ignore[return-value]

    def fetch_article(self, article_id: str) -> Article:
        raise UnsupportedOperation(
            self.platform.display_name, "fetching articles", "Medium does not provide an article fetch API"
        )

    def build_payload(self, article: Article, content_format: ContentFormat) -> Dict[str, Any]:
        # Medium does not render the title field in the post body
        content = ensure_title_in_content(article.title, article.content)
        if content_format is ContentFormat.HTML:
            content = markdown_to_html(content)

        payload: Dict[str, Any] = {
            "title": article.title,
            "contentFormat": content_format.value,
            "content": content,
            "publishStatus": "public" if article.published else "draft",
        }
        if article.canonical_url:
            payload["canonicalUrl"] = article.canonical_url
        if article.tags:
            payload["tags"] = list(article.tags)
        return payload

    def publish_article(
        self, article: Article, content_format: ContentFormat = ContentFormat.MARKDOWN
    ) -> Optional[str]:
        payload = self.build_payload(article, content_format)
        if self.dry_run:
            logger.info(
                "[DRY-RUN] Would publish to Medium: title=%s format=%s tags=%s status=%s",
                article.title,
                content_format,
                article.tags,
                payload["publishStatus"],
            )
            return None

        user_id = self.get_user_id()
        details = (
            "Article Details:\n"
            f"  Title: '{article.title}'\n"
            f"  Format: {content_format}\n"
            f"  Tags: {len(article.tags)} ({', '.join(article.tags)})\n"
            f"  Content length: {len(payload['content'])} chars"
        )
        resp = send(
            self.session,
            "POST",
            f"{self.base_url}/users/{user_id}/posts",
            platform=self.platform.display_name,
            details=details,
            headers={**self._headers(), "Content-Type": "application/json"},
            json=payload,
            timeout=self.runtime.http_timeout,
        )
        data = decode_json(resp, platform=self.platform.display_name)
        post = data.get("data") if isinstance(data, dict) else None
        url = post.get("url") if isinstance(post, dict) else None
        if not url:
            raise RemoteRequestFailed(self.platform.display_name, "publish response did not include a URL")
        logger.info("Published to Medium: %s", url)
        return url

    def list_articles(
        self,
        *,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
        state: Optional[object] = None,
    ) -> List[ArticleSummary]:
        if page is not None or per_page is not None:
            raise UnsupportedOperation(self.platform.display_name, "pagination")
        if state is not None:
            raise UnsupportedOperation(self.platform.display_name, "filtering by state")

        if not self.username:
            self._load_me()
        if not self.username:
            raise ConfigError("Medium username unknown (config 'medium.username' or env MEDIUM_USERNAME)")

        items = fetch_rss_entries(
            MEDIUM_FEED_URL.format(username=self.username),
            session=self.session,
            platform=self.platform.display_name,
            headers={"User-Agent": self.runtime.user_agent},
            timeout=self.runtime.http_timeout,
        )
        return [
            ArticleSummary(
                id=_post_id(item.guid),
                title=item.title,
                url=item.link,
                published_at=item.published.isoformat() if item.published else "",
                tags=item.tags,
            )
            for item in items[:MEDIUM_FEED_LIMIT]
        ]
