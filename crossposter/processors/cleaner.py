"""Cleanup of formatting artifacts left behind by AI-assisted writing tools.

- Strip emoji and pictographic symbols
- Replace typographic punctuation with ASCII equivalents
- Remove non-breaking and zero-width characters

The steps run in that order; none of the replacements produce characters that
an earlier or later step would touch again, so the cleaner is idempotent.
"""

from __future__ import annotations

import re

_SYMBOL_RANGES = (
    ("\U0001F600", "\U0001F64F"),  # emoticons
    ("\U0001F300", "\U0001F5FF"),  # misc symbols and pictographs
    ("\U0001F680", "\U0001F6FF"),  # transport and map
    ("\U0001F1E0", "\U0001F1FF"),  # regional indicators
    ("\u2600", "\u26FF"),  # misc symbols
    ("\u2700", "\u27BF"),  # dingbats
    ("\uFE00", "\uFE0F"),  # variation selectors
    ("\U0001F900", "\U0001F9FF"),  # supplemental symbols and pictographs
    ("\U0001F018", "\U0001F270"),
    ("\u238C", "\u2454"),
    ("\u20D0", "\u20FF"),  # combining marks for symbols
)

_symbols_re = re.compile("[" + "".join(f"{lo}-{hi}" for lo, hi in _SYMBOL_RANGES) + "]")

_TYPOGRAPHY_TRANSLATION = {
    ord("\u2014"): "--",  # em dash
    ord("\u2013"): "-",  # en dash
    ord("\u201C"): '"',  # left double quote
    ord("\u201D"): '"',  # right double quote
    ord("\u2018"): "'",  # left single quote
    ord("\u2019"): "'",  # right single quote
    ord("\u2026"): "...",  # ellipsis
}

_INVISIBLE_TRANSLATION = {
    ord("\u00A0"): None,  # non-breaking space
    ord("\u200B"): None,  # zero-width space
    ord("\u200C"): None,  # zero-width non-joiner
    ord("\u200D"): None,  # zero-width joiner
    ord("\uFEFF"): None,  # zero-width no-break space (BOM)
}


def remove_symbols(text: str) -> str:
    return _symbols_re.sub("", text)


def replace_typography(text: str) -> str:
    return text.translate(_TYPOGRAPHY_TRANSLATION)


def remove_invisible_characters(text: str) -> str:
    return text.translate(_INVISIBLE_TRANSLATION)


def clean_ai_artifacts(text: str | None) -> str:
    """Return ``text`` with symbols, typographic punctuation and invisible characters cleaned."""
    if not text:
        return ""
    text = remove_symbols(text)
    text = replace_typography(text)
    return remove_invisible_characters(text)
