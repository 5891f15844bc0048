from __future__ import annotations

from enum import Enum


class Platform(Enum):
    """Supported destinations.

    The set is closed: the tag ceilings and content rules in
    :mod:`crossposter.processors.sanitizer` are written for exactly these two.
    """

    DEVTO = "devto"
    MEDIUM = "medium"

    @property
    def display_name(self) -> str:
        return "dev.to" if self is Platform.DEVTO else "Medium"

    @property
    def max_tags(self) -> int:
        return 4 if self is Platform.DEVTO else 5

    @classmethod
    def parse(cls, value: str) -> "Platform":
        key = value.strip().lower()
        if key in ("devto", "dev.to"):
            return cls.DEVTO
        if key == "medium":
            return cls.MEDIUM
        raise ValueError(f"Unknown platform: '{value}'. Valid options: devto, medium")

    def __str__(self) -> str:
        return self.display_name


class ContentFormat(Enum):
    MARKDOWN = "markdown"
    HTML = "html"

    @classmethod
    def parse(cls, value: str) -> "ContentFormat":
        key = value.strip().lower()
        if key in ("markdown", "md"):
            return cls.MARKDOWN
        if key == "html":
            return cls.HTML
        raise ValueError(f"Unknown format: '{value}'. Valid options: markdown, html")

    def __str__(self) -> str:
        return self.value


class ArticleState(Enum):
    """dev.to listing filter."""

    PUBLISHED = "published"
    UNPUBLISHED = "unpublished"
    ALL = "all"

    @classmethod
    def parse(cls, value: str) -> "ArticleState":
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(
                f"Unknown state: '{value}'. Valid options: published, unpublished, all"
            ) from None

    def __str__(self) -> str:
        return self.value
