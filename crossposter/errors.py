"""Exception hierarchy shared by the pipeline, the platform clients and the CLI."""

from __future__ import annotations

from typing import Optional


class CrossPosterError(Exception):
    """Base error for the crossposter package."""


class ConfigError(CrossPosterError):
    """Raised when the configuration file is invalid or missing required fields."""


class InvalidArticleUrl(CrossPosterError):
    """Raised when an input URL does not point at a dev.to article."""


# Preamble parsing


class ParseError(CrossPosterError):
    pass


class MissingPreamble(ParseError):
    pass


class InvalidPreambleSyntax(ParseError):
    def __init__(self, diagnostic: str) -> None:
        self.diagnostic = diagnostic
        super().__init__(f"Invalid frontmatter: {diagnostic}")


class TitleConflict(ParseError):
    def __init__(self, frontmatter_title: str, heading_title: str) -> None:
        self.frontmatter_title = frontmatter_title
        self.heading_title = heading_title
        super().__init__(
            f"Title mismatch: frontmatter has '{frontmatter_title}' but content starts "
            f"with '# {heading_title}'. Please update in one place only to avoid inconsistency."
        )


class MissingTitle(ParseError):
    def __init__(self) -> None:
        super().__init__(
            "Missing required 'title'. Please provide either:\n"
            "1. A 'title' field in the frontmatter, or\n"
            "2. An H1 heading (# Title) at the start of your content"
        )


# Conversion


class ConversionError(CrossPosterError):
    pass


class ContentTooLarge(ConversionError):
    def __init__(self, size: int, limit: int, *, stage: str = "input") -> None:
        self.size = size
        self.limit = limit
        self.stage = stage
        what = "Content too large for conversion" if stage == "input" else "Converted HTML too large"
        super().__init__(f"{what}: {size} bytes (max: {limit})")


# Sanitization


class SanitizeError(CrossPosterError):
    pass


class TooManyTags(SanitizeError):
    def __init__(self, platform: str, found: int, limit: int) -> None:
        self.platform = platform
        self.found = found
        self.limit = limit
        super().__init__(f"{platform} allows maximum {limit} tags, found {found}")


class InvalidImageUrl(SanitizeError):
    def __init__(self, url: str, excerpt: str) -> None:
        self.url = url
        self.excerpt = excerpt
        super().__init__(f"Invalid image URL (must be absolute): {url} (near: {excerpt!r})")


# Remote platforms


class UnsupportedOperation(CrossPosterError):
    def __init__(self, platform: str, operation: str, detail: Optional[str] = None) -> None:
        self.platform = platform
        self.operation = operation
        message = f"{platform} does not support {operation}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class RemoteError(CrossPosterError):
    pass


class RemoteRequestFailed(RemoteError):
    """Transport-level failure; the original exception is kept as ``__cause__``."""

    def __init__(self, platform: str, message: str) -> None:
        self.platform = platform
        super().__init__(f"{platform}: {message}")


class RemoteRejected(RemoteError):
    """The remote API answered with a non-success status."""

    def __init__(self, platform: str, status: int, body: str, hint: str, details: str = "") -> None:
        self.platform = platform
        self.status = status
        self.body = body
        self.hint = hint
        message = (
            f"{platform}: {hint} (status {status})\n\n"
            f"Server Response:\n{body or '(no response body)'}"
        )
        if details:
            message = f"{message}\n\n{details}"
        super().__init__(message)
