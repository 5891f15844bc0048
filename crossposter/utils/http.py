"""Single-attempt HTTP helpers shared by the platform clients."""

from __future__ import annotations

from typing import Any

import requests

from ..errors import RemoteRejected, RemoteRequestFailed
from ..utils.logging import get_logger

logger = get_logger("crossposter.utils.http")

_STATUS_HINTS = {
    400: "Article validation failed - check title and content",
    401: "Invalid credentials - check your API key or access token",
    403: "Access forbidden - credentials may lack write permissions",
    404: "Resource not found",
    422: "Article validation failed - check title, content, and tags",
    429: "Rate limit exceeded - please try again later",
}


def hint_for_status(status: int) -> str:
    if status in _STATUS_HINTS:
        return _STATUS_HINTS[status]
    if status >= 500:
        return "Platform server error - please try again later"
    return "API request failed"


def send(
    session: requests.Session,
    method: str,
    url: str,
    *,
    platform: str,
    details: str = "",
    **kwargs: Any,
) -> requests.Response:
    """Perform one request; map transport errors and non-2xx statuses to typed errors."""
    logger.debug("%s %s", method, url)
    try:
        resp = session.request(method, url, **kwargs)
    except requests.RequestException as exc:
        raise RemoteRequestFailed(platform, f"request to {url} failed: {exc}") from exc

    if resp.status_code >= 400 or resp.status_code < 200:
        logger.warning("%s API error (%s): %s", platform, resp.status_code, url)
        raise RemoteRejected(
            platform,
            resp.status_code,
            resp.text or "",
            hint_for_status(resp.status_code),
            details=details,
        )
    return resp


def decode_json(resp: requests.Response, *, platform: str) -> Any:
    try:
        return resp.json()
    except ValueError as exc:
        raise RemoteRequestFailed(platform, f"failed to parse response from {resp.url}: {exc}") from exc
