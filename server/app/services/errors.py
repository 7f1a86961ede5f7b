"""Exceptions raised by the search services."""
from __future__ import annotations


class BraveSearchError(Exception):
    """Base class for search failures surfaced to tool callers."""


class RateLimitExceeded(BraveSearchError):
    """The process-wide request quota is exhausted."""

    def __init__(self, message: str = "Rate limit exceeded") -> None:
        super().__init__(message)


class UpstreamError(BraveSearchError):
    """The Brave API answered with a non-success status."""

    def __init__(self, operation: str, status_code: int, body: str, reason: str = "") -> None:
        self.operation = operation
        self.status_code = status_code
        self.body = body
        self.reason = reason
        status_line = f"{status_code} {reason}".strip()
        super().__init__(f"Brave API error ({operation}): {status_line}\n{body}")


class MalformedResponse(BraveSearchError):
    """A success response whose body could not be decoded."""

    def __init__(self, operation: str, detail: str) -> None:
        self.operation = operation
        self.detail = detail
        super().__init__(f"Brave API returned malformed data ({operation}): {detail}")


class MissingCredentialError(BraveSearchError, RuntimeError):
    """BRAVE_API_KEY is not configured; the server cannot start."""

    def __init__(self) -> None:
        super().__init__("BRAVE_API_KEY environment variable is required")
