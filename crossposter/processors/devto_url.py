from __future__ import annotations

import re

from ..errors import InvalidArticleUrl

# https://dev.to/<username>/<article-slug>-<id>
_devto_url_re = re.compile(r"https?://dev\.to/[^/]+/[^/]+-([a-z0-9]+)/?$")


def is_devto_url(value: str) -> bool:
    return value.startswith(("http://dev.to/", "https://dev.to/"))


def parse_devto_url(url: str) -> str:
    """Extract the article id from a dev.to article URL."""
    match = _devto_url_re.match(url.strip())
    if not match:
        raise InvalidArticleUrl(
            f"Invalid dev.to URL format - expected https://dev.to/username/article-slug-id, got: {url}"
        )
    return match.group(1)
