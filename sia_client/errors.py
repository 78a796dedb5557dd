"""Exceptions raised by the walletd API client."""

from __future__ import annotations

from typing import Optional


class ApiClientError(Exception):
    """Base exception for walletd API client errors."""

    def __init__(
        self,
        message: str,
        *,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class BuildError(ApiClientError):
    """Raised when a client cannot be constructed from its configuration."""


class UrlParseError(ApiClientError):
    """Raised when an endpoint path template cannot be resolved against the base URL."""


class TransportError(ApiClientError):
    """Raised when the HTTP transport fails to complete a request."""


class NodeUnreachableError(TransportError):
    """Raised when the node cannot be connected to."""


class ResponseDecodeError(TransportError):
    """Raised when a successful response body does not match the expected type."""


class ApiTimeoutError(ApiClientError):
    """Raised when the configured per-call deadline elapses."""


class UnexpectedHttpStatus(ApiClientError):
    """Raised for any status code the request's contract does not handle."""

    def __init__(self, status_code: int, *, url: Optional[str] = None) -> None:
        super().__init__(
            f"Unexpected HTTP status {status_code}", url=url, status_code=status_code
        )


class UnexpectedEmptyResponse(ApiClientError):
    """Raised on 204 No Content when the request does not accept an empty body."""

    def __init__(self, expected_type: str, *, url: Optional[str] = None) -> None:
        super().__init__(
            f"Empty response where {expected_type} was expected",
            url=url,
            status_code=204,
        )
        self.expected_type = expected_type


class InvalidIdentifierError(ApiClientError, ValueError):
    """Raised when a caller-supplied address or hash cannot be parsed."""
