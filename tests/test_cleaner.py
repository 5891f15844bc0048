from __future__ import annotations

import pytest

from crossposter.processors.cleaner import (
    clean_ai_artifacts,
    remove_invisible_characters,
    remove_symbols,
    replace_typography,
)


def test_remove_emojis() -> None:
    assert remove_symbols("Hello \U0001F44B World \U0001F30D!") == "Hello  World !"


def test_remove_dingbats_and_misc_symbols() -> None:
    assert remove_symbols("Done \u2705 and \u2600 sunny \u2764") == "Done  and  sunny "


def test_replace_em_and_en_dash() -> None:
    assert replace_typography("This is an em dash \u2014 right here.") == "This is an em dash -- right here."
    assert replace_typography("Range: 1\u201310") == "Range: 1-10"


def test_replace_smart_quotes() -> None:
    text = "\u201CHello\u201D and \u2018world\u2019"
    assert replace_typography(text) == "\"Hello\" and 'world'"


def test_replace_ellipsis() -> None:
    assert replace_typography("Wait\u2026") == "Wait..."


def test_remove_zero_width_characters() -> None:
    assert remove_invisible_characters("Hello\u200BWorld\uFEFF!") == "HelloWorld!"
    assert remove_invisible_characters("a\u00A0b\u200Cc\u200Dd") == "abcd"


def test_clean_ai_artifacts_comprehensive() -> None:
    text = "Hello \U0001F44B \u2014 this is a \u201Ctest\u201D with \u2018quotes\u2019 and \u2026 ellipsis"
    assert clean_ai_artifacts(text) == "Hello  -- this is a \"test\" with 'quotes' and ... ellipsis"


def test_emoji_sequences_lose_joiners_and_selectors() -> None:
    # woman technologist: U+1F469 ZWJ U+1F4BB, then a heart with variation selector
    text = "dev \U0001F469\u200D\U0001F4BB and \u2764\uFE0F"
    assert clean_ai_artifacts(text) == "dev  and "


@pytest.mark.parametrize(
    "text",
    [
        "Normal text without any special characters.",
        "Code: `x = a - b` and \"quotes\" and 'single' ... done",
        "",
    ],
)
def test_ascii_text_is_unchanged(text: str) -> None:
    assert clean_ai_artifacts(text) == text


@pytest.mark.parametrize(
    "text",
    [
        "Hello \U0001F44B \u2014 \u201Cquoted\u201D\u2026",
        "\uFEFF---\ntitle: x\u00A0y\n---\n\u2018body\u2019 \u2013 \u2705",
        "plain ascii",
    ],
)
def test_clean_is_idempotent(text: str) -> None:
    once = clean_ai_artifacts(text)
    assert clean_ai_artifacts(once) == once


def test_non_symbol_unicode_is_preserved() -> None:
    text = "Caf\u00E9 na\u00EFve \u00FCber \u65E5\u672C"
    assert clean_ai_artifacts(text) == text
