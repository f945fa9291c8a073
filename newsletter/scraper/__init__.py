"""Scraper package — page fetch, fragment extraction & markup cleaning."""

from newsletter.scraper.cleaner import clean_html
from newsletter.scraper.errors import (
    FetchError,
    FetchTimeoutError,
    NetworkUnreachableError,
    PageNotFoundError,
)
from newsletter.scraper.extractor import extract_fragment
from newsletter.scraper.fetcher import fetch_url
from newsletter.scraper.models import RawPage


def html_to_text(html: str) -> str:
    """Extract the article body of *html* and clean it into plain text."""
    return clean_html(extract_fragment(html))


__all__ = [
    "fetch_url",
    "extract_fragment",
    "clean_html",
    "html_to_text",
    "RawPage",
    "FetchError",
    "FetchTimeoutError",
    "NetworkUnreachableError",
    "PageNotFoundError",
]
