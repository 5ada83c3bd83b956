"""Errors raised by the fetch pipeline.

ValidationError, FetchTimeoutError and NetworkError are terminal for the
call that raised them and are never retried. TransformError stays inside the
transformer, which falls back to the untransformed text.
"""


class FetchError(Exception):
    """Base class for fetch pipeline errors."""


class ValidationError(FetchError, ValueError):
    """The URL was rejected before any network I/O."""


class FetchTimeoutError(FetchError, TimeoutError):
    """The request did not complete within the caller's timeout."""

    def __init__(self, timeout_seconds: float):
        self.timeout_seconds = timeout_seconds
        super().__init__(f"Request timed out after {timeout_seconds}s")


class NetworkError(FetchError):
    """Connection-level failure: refused, DNS, reset, redirect loop."""


class TransformError(FetchError):
    """Body could not be decoded for its declared content type."""
