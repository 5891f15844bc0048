"""Markdown to HTML conversion for Medium.

Raw HTML in the source is never passed through: the parser runs with ``html``
disabled, so tags come out escaped as literal text.
"""

from __future__ import annotations

import re

from markdown_it import MarkdownIt
from markdown_it.rules_core import StateCore
from mdit_py_plugins.footnote import footnote_plugin
from mdit_py_plugins.tasklists import tasklists_plugin

from ..errors import ContentTooLarge
from ..utils.logging import get_logger

logger = get_logger("crossposter.processors.converter")

# Medium's approximate content size limit (1 MiB)
MAX_CONTENT_SIZE = 1024 * 1024

_heading_attrs_re = re.compile(r"\s*\{([^{}]*)\}\s*$")


def _heading_attributes(state: StateCore) -> None:
    """Apply trailing ``{#id .class}`` blocks to headings.

    Only ids and classes are honoured; any other item in the block is dropped.
    """
    tokens = state.tokens
    for idx, token in enumerate(tokens):
        if token.type != "heading_open" or idx + 1 >= len(tokens):
            continue
        inline = tokens[idx + 1]
        if not inline.children or inline.children[-1].type != "text":
            continue
        last = inline.children[-1]
        match = _heading_attrs_re.search(last.content)
        if not match:
            continue
        for item in match.group(1).split():
            if item.startswith("#") and len(item) > 1:
                token.attrSet("id", item[1:])
            elif item.startswith(".") and len(item) > 1:
                token.attrJoin("class", item[1:])
        last.content = last.content[: match.start()]
        inline.content = _heading_attrs_re.sub("", inline.content)


def _build_parser() -> MarkdownIt:
    md = (
        MarkdownIt("commonmark", {"html": False})
        .enable(["table", "strikethrough"])
        .use(footnote_plugin)
        .use(tasklists_plugin)
    )
    md.core.ruler.push("heading_attributes", _heading_attributes)
    return md


_parser = _build_parser()


def _byte_size(text: str) -> int:
    return len(text.encode("utf-8"))


def markdown_to_html(markdown: str) -> str:
    """Convert markdown to HTML, enforcing the size limit on input and output."""
    size = _byte_size(markdown)
    if size > MAX_CONTENT_SIZE:
        raise ContentTooLarge(size, MAX_CONTENT_SIZE, stage="input")

    html_output = _parser.render(markdown)

    out_size = _byte_size(html_output)
    if out_size > MAX_CONTENT_SIZE:
        raise ContentTooLarge(out_size, MAX_CONTENT_SIZE, stage="output")

    logger.debug("Converted %d bytes of markdown into %d bytes of HTML", size, out_size)
    return html_output


def ensure_title_in_content(title: str, content: str) -> str:
    """Prepend ``title`` as an H1 heading unless the content already opens with one.

    Any leading H1 counts, whether or not its text matches ``title``.
    """
    if content.lstrip().startswith("# "):
        return content
    return f"# {title}\n\n{content}"
