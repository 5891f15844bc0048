from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import List, Optional


@dataclass(slots=True)
class Article:
    """An article as it flows through the pipeline.

    ``content`` is markdown and is rewritten in place by the cleaning and
    sanitizing steps, so each destination works on its own :meth:`copy`.
    """

    title: str
    content: str
    tags: List[str] = field(default_factory=list)
    canonical_url: Optional[str] = None
    published: bool = True
    cover_image: Optional[str] = None
    description: Optional[str] = None

    def copy(self) -> "Article":
        return replace(self, tags=list(self.tags))


@dataclass(slots=True)
class ArticleSummary:
    """Lightweight listing entry returned by the platform clients."""

    id: str
    title: str
    url: str
    published_at: str
    tags: List[str] = field(default_factory=list)
