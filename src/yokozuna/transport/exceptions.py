"""Client-side exceptions."""

from __future__ import annotations


class YokozunaError(Exception):
    """Base exception for Yokozuna client errors."""


class TransportError(YokozunaError):
    """Raised when the search service cannot be reached or rejects a request.

    Args:
        message: Human-readable description.
        status_code: HTTP status returned by the node, if any.
        body: Raw response body, if any.
    """

    def __init__(self, message: str, *, status_code: int | None = None, body: bytes | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ResponseDecodeError(YokozunaError):
    """Raised when a query response body is not a usable JSON document."""


class ConfigurationError(YokozunaError):
    """Raised when client configuration is invalid."""
