from __future__ import annotations

import json as jsonlib
from collections import defaultdict, deque
from typing import Any, Deque, Dict, List, Optional, Tuple

import pytest
import requests

from crossposter.models import Article

_NO_JSON = object()


class FakeResponse:
    def __init__(
        self,
        *,
        status_code: int = 200,
        json_data: Any = _NO_JSON,
        text: Optional[str] = None,
        content: Optional[bytes] = None,
        url: str = "",
    ) -> None:
        self.status_code = status_code
        self._json = json_data
        if text is None:
            text = "" if json_data is _NO_JSON else jsonlib.dumps(json_data)
        self.text = text
        self.content = content if content is not None else text.encode("utf-8")
        self.url = url

    def json(self) -> Any:
        if self._json is _NO_JSON:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._json


class FakeSession:
    """Stand-in for ``requests.Session`` serving queued responses per (method, url)."""

    def __init__(self) -> None:
        self._responses: Dict[Tuple[str, str], Deque[Any]] = defaultdict(deque)
        self.calls: List[Dict[str, Any]] = []

    def add(self, method: str, url: str, **response: Any) -> None:
        self._responses[(method.upper(), url)].append(FakeResponse(url=url, **response))

    def add_error(self, method: str, url: str, exc: Exception) -> None:
        self._responses[(method.upper(), url)].append(exc)

    def request(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"method": method.upper(), "url": url, **kwargs})
        queue = self._responses.get((method.upper(), url))
        if not queue:
            raise AssertionError(f"unexpected request: {method} {url}")
        item = queue.popleft()
        if isinstance(item, Exception):
            raise item
        return item

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        return self.request("GET", url, **kwargs)

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        return self.request("POST", url, **kwargs)


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def connection_error() -> requests.ConnectionError:
    return requests.ConnectionError("connection refused")


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:  # pyright: ignore[reportUnusedFunction]
    for name in (
        "DEVTO_API_KEY",
        "MEDIUM_ACCESS_TOKEN",
        "MEDIUM_USER_ID",
        "MEDIUM_USERNAME",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("CROSSPOSTER_CONFIG", str(tmp_path / "config.yaml"))


@pytest.fixture
def article() -> Article:
    return Article(
        title="Shipping Python Packages",
        content=(
            "# Shipping Python Packages\n\n"
            "Intro paragraph.\n\n"
            "{% embed https://github.com/pypa/pip %}\n\n"
            "![diagram](https://example.com/diagram.png)\n"
        ),
        tags=["python", "packaging", "tooling"],
        canonical_url="https://blog.example.com/shipping",
    )


SAMPLE_DOCUMENT = """---
title: "Shipping Python Packages"
tags: [python, packaging, tooling]
canonical_url: https://blog.example.com/shipping
published: false
---

# Shipping Python Packages

Intro paragraph.

{% embed https://github.com/pypa/pip %}

![diagram](https://example.com/diagram.png)
"""


@pytest.fixture
def sample_document() -> str:
    return SAMPLE_DOCUMENT
