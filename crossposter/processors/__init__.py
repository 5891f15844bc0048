"""Content pipeline: cleaning, frontmatter parsing, conversion and sanitization."""

from .cleaner import clean_ai_artifacts
from .converter import MAX_CONTENT_SIZE, ensure_title_in_content, markdown_to_html
from .devto_url import is_devto_url, parse_devto_url
from .frontmatter import Frontmatter, parse_markdown
from .sanitizer import sanitize_for_platform, truncate_tags_to_limit

__all__ = [
    "clean_ai_artifacts",
    "MAX_CONTENT_SIZE",
    "ensure_title_in_content",
    "markdown_to_html",
    "is_devto_url",
    "parse_devto_url",
    "Frontmatter",
    "parse_markdown",
    "sanitize_for_platform",
    "truncate_tags_to_limit",
]
