"""Per-platform content rules.

| Platform | Max tags | Content transform          | Images            |
|----------|----------|----------------------------|-------------------|
| dev.to   | 4        | none                       | absolute URL only |
| Medium   | 5        | strip ``{% ... %}`` tags   | absolute URL only |

Checks run against a working copy of the content; the article is only
updated once every check for the platform has passed.
"""

from __future__ import annotations

import re
from typing import List, Tuple

from ..errors import InvalidImageUrl, TooManyTags
from ..models import Article, Platform
from ..utils.logging import get_logger

logger = get_logger("crossposter.processors.sanitizer")

_liquid_tag_re = re.compile(r"\{%.*?%\}")
_image_re = re.compile(r"!\[.*?\]\((.*?)\)")

_ABSOLUTE_PREFIXES = ("http://", "https://")
_EXCERPT_RADIUS = 40


def remove_liquid_tags(content: str) -> str:
    """Remove dev.to Liquid tags such as ``{% tweet 123 %}``."""
    return _liquid_tag_re.sub("", content)


def _excerpt(content: str, start: int, end: int) -> str:
    lo = max(0, start - _EXCERPT_RADIUS)
    hi = min(len(content), end + _EXCERPT_RADIUS)
    return content[lo:hi]


def validate_image_urls(content: str) -> None:
    for match in _image_re.finditer(content):
        url = match.group(1)
        if not url.startswith(_ABSOLUTE_PREFIXES):
            raise InvalidImageUrl(url, _excerpt(content, match.start(), match.end()))


def check_tag_count(tags: List[str], platform: Platform) -> None:
    if len(tags) > platform.max_tags:
        raise TooManyTags(platform.display_name, len(tags), platform.max_tags)


def truncate_tags_to_limit(article: Article, platform: Platform) -> Tuple[List[str], List[str]]:
    """Drop tags beyond the platform limit; returns (included, excluded).

    Opt-in alternative to the ``TooManyTags`` failure, used by the
    orchestrator when tag truncation is enabled.
    """
    limit = platform.max_tags
    included, excluded = article.tags[:limit], article.tags[limit:]
    if excluded:
        logger.warning(
            "%s only supports %d tags. Truncating from %d to %d tags. Included: %s. Excluded: %s",
            platform.display_name,
            limit,
            len(article.tags),
            len(included),
            ", ".join(included),
            ", ".join(excluded),
        )
        article.tags = list(included)
    return included, excluded


def sanitize_for_platform(article: Article, platform: Platform) -> None:
    """Validate and rewrite ``article`` for ``platform`` in place.

    Raises ``TooManyTags`` or ``InvalidImageUrl``; on failure the article is
    left untouched.
    """
    check_tag_count(article.tags, platform)

    content = article.content
    if platform is Platform.MEDIUM:
        content = remove_liquid_tags(content)

    validate_image_urls(content)

    article.content = content
    logger.debug("Sanitized '%s' for %s", article.title, platform.display_name)
