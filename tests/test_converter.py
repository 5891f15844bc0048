from __future__ import annotations

import pytest

from crossposter.errors import ContentTooLarge
from crossposter.processors import converter
from crossposter.processors.converter import MAX_CONTENT_SIZE, ensure_title_in_content, markdown_to_html


def test_basic_markdown_to_html() -> None:
    html = markdown_to_html("# Hello World\n\nThis is **bold** and *italic* text.")
    assert "<h1>Hello World</h1>" in html
    assert "<strong>bold</strong>" in html
    assert "<em>italic</em>" in html


def test_code_block() -> None:
    html = markdown_to_html("```python\nprint('hi')\n```\n")
    assert '<pre><code class="language-python">' in html
    assert "print(&#x27;hi&#x27;)" in html or "print('hi')" in html


def test_table() -> None:
    html = markdown_to_html("| Name | Value |\n|------|-------|\n| a | 1 |\n")
    assert "<table>" in html
    assert "<th>Name</th>" in html
    assert "<td>1</td>" in html


def test_strikethrough() -> None:
    assert "<s>gone</s>" in markdown_to_html("This is ~~gone~~ now.")


def test_footnotes() -> None:
    html = markdown_to_html("Claim.[^1]\n\n[^1]: Source.\n")
    assert "footnote-ref" in html
    assert "Source." in html


def test_task_lists() -> None:
    html = markdown_to_html("- [x] done\n- [ ] todo\n")
    assert 'type="checkbox"' in html
    assert "task-list-item" in html


def test_heading_attributes() -> None:
    html = markdown_to_html("## Setup {#setup .intro}\n")
    assert 'id="setup"' in html
    assert 'class="intro"' in html
    assert "{#setup" not in html
    assert ">Setup</h2>" in html


@pytest.mark.parametrize(
    "heading",
    [
        "# T {onclick=x}\n",
        "# Title {onclick=alert(1) style=x}\n",
        "# Title {#ok onerror=x .cls}\n",
    ],
)
def test_heading_attributes_only_allow_id_and_class(heading: str) -> None:
    html = markdown_to_html(heading)
    assert "onclick" not in html
    assert "onerror" not in html
    assert "style" not in html
    assert "<h1" in html


def test_raw_html_is_escaped() -> None:
    html = markdown_to_html("<script>alert(1)</script>\n")
    assert "<script>" not in html
    assert "&lt;script&gt;" in html


def test_input_over_limit_is_rejected() -> None:
    with pytest.raises(ContentTooLarge) as excinfo:
        markdown_to_html("a" * (MAX_CONTENT_SIZE + 1))
    assert excinfo.value.stage == "input"
    assert excinfo.value.limit == MAX_CONTENT_SIZE
    assert "Content too large for conversion" in str(excinfo.value)


def test_oversized_input_is_rejected_before_rendering(monkeypatch: pytest.MonkeyPatch) -> None:
    def render(_src: str) -> str:
        raise AssertionError("render must not run for oversized input")

    monkeypatch.setattr(converter._parser, "render", render)
    with pytest.raises(ContentTooLarge) as excinfo:
        markdown_to_html("a" * (MAX_CONTENT_SIZE + 1))
    assert excinfo.value.stage == "input"


def test_limit_counts_bytes_not_characters() -> None:
    # each of these characters is three bytes in UTF-8
    text = "\u65E5" * (MAX_CONTENT_SIZE // 3 + 1)
    assert len(text) < MAX_CONTENT_SIZE
    with pytest.raises(ContentTooLarge):
        markdown_to_html(text)


def test_output_over_limit_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(converter, "MAX_CONTENT_SIZE", 20)
    with pytest.raises(ContentTooLarge) as excinfo:
        markdown_to_html("a\n\nb\n\nc\n\n")
    assert excinfo.value.stage == "output"
    assert "Converted HTML too large" in str(excinfo.value)


@pytest.mark.parametrize(
    "title, content, expected",
    [
        ("X", "# Y\n\nbody", "# Y\n\nbody"),
        ("X", "body", "# X\n\nbody"),
        ("X", "## Intro\n\nbody", "# X\n\n## Intro\n\nbody"),
        ("X", "\n\n  # Y\n", "\n\n  # Y\n"),
        ("X", "", "# X\n\n"),
        ("X", "# ", "# "),
    ],
)
def test_ensure_title_in_content(title: str, content: str, expected: str) -> None:
    assert ensure_title_in_content(title, content) == expected
