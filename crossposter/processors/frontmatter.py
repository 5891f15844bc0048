"""Parse markdown documents with a YAML frontmatter block into an ``Article``.

A document looks like::

    ---
    title: "My Article"
    tags: [python, testing]
    published: false
    ---

    # My Article

    Body text...

The title may come from the frontmatter, from the first ``# `` heading of the
body, or from both as long as they agree.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

import yaml

from ..errors import InvalidPreambleSyntax, MissingPreamble, MissingTitle, TitleConflict
from ..models import Article
from ..utils.logging import get_logger

logger = get_logger("crossposter.processors.frontmatter")

_DELIMITER_RE = re.compile(r"^---[ \t]*\r?$")

_OPTIONAL_STR_FIELDS = ("title", "canonical_url", "cover_image", "description")


@dataclass(slots=True)
class Frontmatter:
    title: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    canonical_url: Optional[str] = None
    published: bool = True
    cover_image: Optional[str] = None
    description: Optional[str] = None


def split_frontmatter(document: str) -> Tuple[str, str]:
    """Split ``document`` into (frontmatter_text, body).

    Raises ``MissingPreamble`` when the document does not open with a ``---``
    line or the block is never closed.
    """
    if document.startswith("\uFEFF"):
        document = document.lstrip("\uFEFF")

    lines = document.splitlines(keepends=True)
    if not lines or not _DELIMITER_RE.match(lines[0]):
        raise MissingPreamble("Failed to parse frontmatter: document must start with a '---' line")

    try:
        end_idx = next(i for i in range(1, len(lines)) if _DELIMITER_RE.match(lines[i]))
    except StopIteration:
        raise MissingPreamble("Failed to parse frontmatter: closing '---' line not found") from None

    block = "".join(lines[1:end_idx])
    body = "".join(lines[end_idx + 1 :]).lstrip("\r\n")
    return block, body


def _optional_str(data: dict, key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidPreambleSyntax(f"'{key}' must be a string, got {type(value).__name__}")
    return value


def decode_frontmatter(block: str) -> Frontmatter:
    """Decode the YAML block into a ``Frontmatter``.

    Unknown keys are ignored. ``published`` defaults to true and ``tags`` to
    an empty list.
    """
    try:
        data: Any = yaml.safe_load(block)
    except yaml.YAMLError as exc:
        raise InvalidPreambleSyntax(str(exc)) from exc

    if data is None:
        return Frontmatter()
    if not isinstance(data, dict):
        raise InvalidPreambleSyntax(f"frontmatter must be a mapping, got {type(data).__name__}")

    values = {key: _optional_str(data, key) for key in _OPTIONAL_STR_FIELDS}

    tags = data.get("tags")
    if tags is None:
        tags = []
    if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
        raise InvalidPreambleSyntax("'tags' must be a list of strings")

    published = data.get("published", True)
    if published is None:
        published = True
    if not isinstance(published, bool):
        raise InvalidPreambleSyntax(f"'published' must be a boolean, got {published!r}")

    return Frontmatter(tags=list(tags), published=published, **values)


def extract_first_h1(content: str) -> Optional[str]:
    """Return the text of the first non-empty ``# `` heading line, if any."""
    for line in content.splitlines():
        stripped = line.strip()
        if stripped.startswith("# "):
            title = stripped[2:].strip()
            if title:
                return title
    return None


def resolve_title(frontmatter_title: Optional[str], heading_title: Optional[str]) -> str:
    if frontmatter_title is not None and heading_title is not None:
        if frontmatter_title.strip() != heading_title.strip():
            raise TitleConflict(frontmatter_title, heading_title)
        return frontmatter_title
    if frontmatter_title is not None:
        return frontmatter_title
    if heading_title is not None:
        return heading_title
    raise MissingTitle()


def parse_markdown(document: str) -> Article:
    """Parse a markdown document with frontmatter into an ``Article``.

    The body keeps its heading line; only the title is resolved from it.
    """
    block, body = split_frontmatter(document)
    fm = decode_frontmatter(block)

    # A blank frontmatter title counts as absent
    fm_title = fm.title if fm.title and fm.title.strip() else None
    title = resolve_title(fm_title, extract_first_h1(body))
    logger.debug("Parsed article '%s' with %d tag(s)", title, len(fm.tags))

    return Article(
        title=title,
        content=body,
        tags=fm.tags,
        canonical_url=fm.canonical_url,
        published=fm.published,
        cover_image=fm.cover_image,
        description=fm.description,
    )
