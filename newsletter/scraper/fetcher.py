"""HTTP fetcher with classified failures."""

from __future__ import annotations

import logging

import httpx

from newsletter.config import settings
from newsletter.scraper.errors import (
    FetchError,
    FetchTimeoutError,
    NetworkUnreachableError,
    PageNotFoundError,
)
from newsletter.scraper.models import RawPage

logger = logging.getLogger(__name__)


def _default_headers() -> dict[str, str]:
    return {"User-Agent": settings.user_agent}


def _classify(url: str, exc: Exception) -> FetchError:
    """Map an ``httpx`` exception onto the :class:`FetchError` hierarchy."""
    if isinstance(exc, httpx.TimeoutException):
        return FetchTimeoutError(
            "Request timeout: The server took too long to respond. "
            "Please try again in a moment.",
            url=url,
        )
    if isinstance(exc, httpx.ConnectError):
        return NetworkUnreachableError(
            f"Network error: Could not connect to {url}. "
            "Please check your internet connection and try again.",
            url=url,
        )
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        if status == 404:
            return PageNotFoundError(f"Not found: {url} (HTTP 404)", url=url, status_code=status)
        return FetchError(f"Error fetching {url}: HTTP {status}", url=url, status_code=status)
    return FetchError(f"Error fetching {url}: {exc}", url=url)


def fetch_url(url: str) -> RawPage:
    """Fetch *url* and return a :class:`RawPage`.

    Raises:
        FetchError: (or a subclass) for timeouts, unreachable hosts, 4xx/5xx
            responses and any other transport failure.
    """
    logger.debug("GET %s", url)
    try:
        with httpx.Client(
            headers=_default_headers(),
            timeout=settings.request_timeout,
            follow_redirects=True,
        ) as client:
            response = client.get(url)
            response.raise_for_status()
            html = response.text
            status_code = response.status_code
    except httpx.HTTPError as exc:
        error = _classify(url, exc)
        logger.warning("Fetch failed for %s: %s", url, exc)
        raise error from exc

    logger.debug("GET %s -> HTTP %d (%d chars)", url, status_code, len(html))
    return RawPage(url=url, html=html, status_code=status_code)
