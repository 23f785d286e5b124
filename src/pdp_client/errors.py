"""Exceptions raised by the PDP client."""

from __future__ import annotations

from typing import Optional


class PDPClientError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(PDPClientError, ValueError):
    pass


class MalformedEndpoint(PDPClientError, ValueError):
    """The schema/hostname/port/path combination cannot form a URL."""


class TransportFailure(PDPClientError):
    """A single attempt failed before an HTTP response was received."""

    def __init__(self, message: str, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.url = url


class RetryExhausted(PDPClientError):
    """Every attempt allowed by the retry policy failed."""

    def __init__(self, last_error: BaseException, attempts: int) -> None:
        super().__init__(f"giving up after {attempts} attempt(s): {last_error}")
        self.last_error = last_error
        self.attempts = attempts


class MalformedResponse(PDPClientError, ValueError):
    """The PDP answered, but the body is not the JSON we were asked to decode."""


__all__ = [
    "PDPClientError",
    "ConfigurationError",
    "MalformedEndpoint",
    "TransportFailure",
    "RetryExhausted",
    "MalformedResponse",
]
