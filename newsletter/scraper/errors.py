"""Classified fetch failures.

Every network failure surfaces as a :class:`FetchError` so callers only have
to catch one type; the subclasses let the CLI print a specific hint.
"""

from __future__ import annotations


class FetchError(Exception):
    """A page or feed could not be retrieved."""

    def __init__(self, message: str, url: str = "", status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class PageNotFoundError(FetchError):
    """The server answered 404."""


class NetworkUnreachableError(FetchError):
    """DNS lookup failed or the connection was refused."""


class FetchTimeoutError(FetchError):
    """The server took too long to respond."""
