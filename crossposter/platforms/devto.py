from __future__ import annotations

from typing import Any, Dict, List, Optional

import requests

from ..errors import ConfigError, RemoteRequestFailed
from ..models import Article, ArticleState, ArticleSummary, ContentFormat, Platform
from ..utils.http import decode_json, send
from ..utils.logging import get_logger
from ..utils.pipeline_config import RuntimeConfig
from .base import PlatformClient

logger = get_logger("crossposter.platforms.devto")

DEVTO_API_URL = "https://dev.to/api"


def _tags_from(payload: Dict[str, Any]) -> List[str]:
    # Single-article responses carry ``tags`` as a list and ``tag_list`` as a
    # comma-separated string; listing responses swap the two.
    for key in ("tags", "tag_list"):
        value = payload.get(key)
        if isinstance(value, list):
            return [str(t) for t in value]
    for key in ("tag_list", "tags"):
        value = payload.get(key)
        if isinstance(value, str):
            return [t.strip() for t in value.split(",") if t.strip()]
    return []


class DevToClient(PlatformClient):
    """dev.to (Forem) API client.

    Environment:
      - DEVTO_API_KEY (or ``devto.api_key`` in the config file)
    """

    platform = Platform.DEVTO

    def __init__(
        self,
        *,
        api_key: Optional[str] = None,
        base_url: str = DEVTO_API_URL,
        session: Optional[requests.Session] = None,
        runtime: Optional[RuntimeConfig] = None,
        dry_run: bool = False,
    ) -> None:
        if not api_key and not dry_run:
            raise ConfigError("dev.to api_key not set (config 'devto.api_key' or env DEVTO_API_KEY)")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.runtime = runtime or RuntimeConfig()
        self.dry_run = dry_run

    def _headers(self) -> Dict[str, str]:
        return {
            "api-key": self.api_key or "",
            "Accept": "application/vnd.forem.api-v1+json",
            "User-Agent": self.runtime.user_agent,
        }

    def fetch_article(self, article_id: str) -> Article:
        url = f"{self.base_url}/articles/{article_id}"
        resp = send(
            self.session,
            "GET",
            url,
            platform=self.platform.display_name,
            headers=self._headers(),
            timeout=self.runtime.http_timeout,
        )
        data = decode_json(resp, platform=self.platform.display_name)
        if not isinstance(data, dict) or "title" not in data or "body_markdown" not in data:
            raise RemoteRequestFailed(self.platform.display_name, f"unexpected article payload for id {article_id}")

        logger.info("Fetched dev.to article %s: %s", article_id, data["title"])
        return Article(
            title=data["title"],
            content=data["body_markdown"] or "",
            tags=_tags_from(data),
            canonical_url=data.get("canonical_url"),
            published=bool(data.get("published", True)),
            cover_image=data.get("cover_image"),
            description=data.get("description"),
        )

    def build_payload(self, article: Article) -> Dict[str, Any]:
        fields: Dict[str, Any] = {
            "title": article.title,
            "body_markdown": article.content,
            "published": article.published,
            "tags": list(article.tags),
            "canonical_url": article.canonical_url,
            "main_image": article.cover_image,
            "description": article.description,
        }
        return {"article": {k: v for k, v in fields.items() if v not in (None, [])}}

    def publish_article(
        self, article: Article, content_format: ContentFormat = ContentFormat.MARKDOWN
    ) -> Optional[str]:
        # dev.to only accepts markdown; content_format is ignored
        payload = self.build_payload(article)
        if self.dry_run:
            logger.info(
                "[DRY-RUN] Would publish to dev.to: title=%s tags=%s published=%s",
                article.title,
                article.tags,
                article.published,
            )
            return None

        details = (
            "Article Details:\n"
            f"  Title: '{article.title}'\n"
            f"  Tags: {len(article.tags)} ({', '.join(article.tags)})\n"
            f"  Content length: {len(article.content)} chars\n"
            f"  Published: {article.published}"
        )
        resp = send(
            self.session,
            "POST",
            f"{self.base_url}/articles",
            platform=self.platform.display_name,
            details=details,
            headers={**self._headers(), "Content-Type": "application/json"},
            json=payload,
            timeout=self.runtime.http_timeout,
        )
        data = decode_json(resp, platform=self.platform.display_name)
        url = data.get("url") if isinstance(data, dict) else None
        if not url:
            raise RemoteRequestFailed(self.platform.display_name, "publish response did not include a URL")
        logger.info("Published to dev.to: %s", url)
        return url

    def list_articles(
        self,
        *,
        page: int = 1,
        per_page: int = 30,
        state: ArticleState = ArticleState.PUBLISHED,
    ) -> List[ArticleSummary]:
        resp = send(
            self.session,
            "GET",
            f"{self.base_url}/articles/me/{state.value}",
            platform=self.platform.display_name,
            headers=self._headers(),
            params={"page": page, "per_page": per_page},
            timeout=self.runtime.http_timeout,
        )
        data = decode_json(resp, platform=self.platform.display_name)
        if not isinstance(data, list):
            raise RemoteRequestFailed(self.platform.display_name, "expected a list of articles")

        summaries: List[ArticleSummary] = []
        for item in data:
            summaries.append(
                ArticleSummary(
                    id=str(item.get("id", "")),
                    title=item.get("title") or "",
                    url=item.get("url") or "",
                    published_at=item.get("published_at") or "",
                    tags=_tags_from(item),
                )
            )
        logger.info("Listed %d dev.to article(s) (state=%s, page=%d)", len(summaries), state, page)
        return summaries
