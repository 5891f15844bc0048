from __future__ import annotations

import logging

import pytest

from crossposter.errors import InvalidImageUrl, TooManyTags
from crossposter.models import Article, Platform
from crossposter.processors.sanitizer import (
    remove_liquid_tags,
    sanitize_for_platform,
    truncate_tags_to_limit,
    validate_image_urls,
)


def _article(content: str = "Body", tags=None) -> Article:
    return Article(title="Test", content=content, tags=list(tags or []))


def test_devto_rejects_five_tags() -> None:
    art = _article(tags=["a", "b", "c", "d", "e"])
    with pytest.raises(TooManyTags) as excinfo:
        sanitize_for_platform(art, Platform.DEVTO)
    assert str(excinfo.value) == "dev.to allows maximum 4 tags, found 5"


def test_devto_accepts_four_tags() -> None:
    art = _article(content="Body {% tweet 1 %}", tags=["a", "b", "c", "d"])
    sanitize_for_platform(art, Platform.DEVTO)
    assert art.tags == ["a", "b", "c", "d"]
    # dev.to renders Liquid tags itself
    assert art.content == "Body {% tweet 1 %}"


def test_medium_rejects_six_tags() -> None:
    art = _article(tags=["a", "b", "c", "d", "e", "f"])
    with pytest.raises(TooManyTags) as excinfo:
        sanitize_for_platform(art, Platform.MEDIUM)
    assert excinfo.value.found == 6
    assert excinfo.value.limit == 5


def test_medium_strips_liquid_tags() -> None:
    art = _article(content="a {% x %} b")
    sanitize_for_platform(art, Platform.MEDIUM)
    assert art.content == "a  b"


def test_liquid_tags_are_matched_lazily() -> None:
    assert remove_liquid_tags("{% a %}keep{% b %}") == "keep"
    assert remove_liquid_tags("no tags here") == "no tags here"


@pytest.mark.parametrize("platform", [Platform.DEVTO, Platform.MEDIUM])
def test_relative_image_is_rejected(platform: Platform) -> None:
    art = _article(content="Intro\n\n![local](./images/diagram.png)\n\nOutro")
    with pytest.raises(InvalidImageUrl) as excinfo:
        sanitize_for_platform(art, platform)
    assert excinfo.value.url == "./images/diagram.png"
    assert "![local](./images/diagram.png)" in excinfo.value.excerpt


@pytest.mark.parametrize(
    "content",
    [
        "![img](https://example.com/a.png)",
        "![img](http://example.com/a.png)",
        "No images at all",
    ],
)
def test_absolute_images_pass(content: str) -> None:
    validate_image_urls(content)


def test_failed_sanitize_leaves_article_untouched() -> None:
    content = "{% embed https://x.test %}\n\n![bad](img.png)\n"
    art = _article(content=content, tags=["a"])
    with pytest.raises(InvalidImageUrl):
        sanitize_for_platform(art, Platform.MEDIUM)
    assert art.content == content
    assert art.tags == ["a"]


def test_sanitize_is_idempotent(article: Article) -> None:
    sanitize_for_platform(article, Platform.MEDIUM)
    once = article.content
    sanitize_for_platform(article, Platform.MEDIUM)
    assert article.content == once


def test_truncate_tags_keeps_first_n(caplog: pytest.LogCaptureFixture) -> None:
    art = _article(tags=["a", "b", "c", "d", "e", "f"])
    with caplog.at_level(logging.WARNING):
        included, excluded = truncate_tags_to_limit(art, Platform.DEVTO)
    assert included == ["a", "b", "c", "d"]
    assert excluded == ["e", "f"]
    assert art.tags == ["a", "b", "c", "d"]
    assert "Truncating from 6 to 4 tags" in caplog.text


def test_truncate_tags_within_limit_is_noop() -> None:
    art = _article(tags=["a", "b"])
    assert truncate_tags_to_limit(art, Platform.MEDIUM) == (["a", "b"], [])
    assert art.tags == ["a", "b"]
