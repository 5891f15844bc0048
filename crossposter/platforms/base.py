from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models import Article, ArticleSummary, ContentFormat, Platform


class PlatformClient(ABC):
    """Abstract client for a publishing platform."""

    platform: Platform

    @abstractmethod
    def fetch_article(self, article_id: str) -> Article:
        """Return the article with the given platform id."""

    @abstractmethod
    def publish_article(
        self, article: Article, content_format: ContentFormat = ContentFormat.MARKDOWN
    ) -> Optional[str]:
        """Publish a sanitized article and return its public URL (``None`` in dry-run)."""

    @abstractmethod
    def list_articles(self, **kwargs) -> List[ArticleSummary]:
        """Return summaries of the authenticated user's articles."""
