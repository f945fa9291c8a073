"""Fragment extraction: picks the article body out of a full HTML page.

Candidates are tried in a fixed priority order and the first one with
non-blank inner content wins:

    1. ``<article>``
    2. ``<div>``/``<main>`` whose class contains ``post-content``, then ``content``
    3. ``<main>``
    4. ``<body>``
    5. the whole document

This is plain pattern matching over text; no tree is built.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Optional

logger = logging.getLogger(__name__)

_FLAGS = re.IGNORECASE | re.DOTALL

_ARTICLE_RE = re.compile(r"<article\b[^>]*>(.*?)</article>", _FLAGS)
_MAIN_RE = re.compile(r"<main\b[^>]*>(.*?)</main>", _FLAGS)
_BODY_RE = re.compile(r"<body\b[^>]*>(.*?)</body>", _FLAGS)

# Class substrings checked in order; the first that matches any container wins.
CONTENT_CLASSES = ("post-content", "content")


def _container_re(class_fragment: str) -> re.Pattern[str]:
    return re.compile(
        r"<(?P<tag>div|main)\b[^>]*\bclass=[\"'][^\"']*"
        + re.escape(class_fragment)
        + r"[^\"']*[\"'][^>]*>(?P<inner>.*?)</(?P=tag)>",
        _FLAGS,
    )


_CONTAINER_RES = [_container_re(name) for name in CONTENT_CLASSES]


# ---------------------------------------------------------------------------
# Candidates
# ---------------------------------------------------------------------------

def _non_blank(text: Optional[str]) -> Optional[str]:
    if text is None or not text.strip():
        return None
    return text


def _match_article(html: str) -> Optional[str]:
    """Inner content of the first ``<article>`` element."""
    m = _ARTICLE_RE.search(html)
    return _non_blank(m.group(1)) if m else None


def _match_content_container(html: str) -> Optional[str]:
    """Inner content of the first ``<div>``/``<main>`` with a content-like class."""
    for pattern in _CONTAINER_RES:
        m = pattern.search(html)
        if m and _non_blank(m.group("inner")):
            return m.group("inner")
    return None


def _match_main(html: str) -> Optional[str]:
    """Inner content of the first ``<main>`` element."""
    m = _MAIN_RE.search(html)
    return _non_blank(m.group(1)) if m else None


def _match_body(html: str) -> Optional[str]:
    """Inner content of ``<body>``."""
    m = _BODY_RE.search(html)
    return _non_blank(m.group(1)) if m else None


CANDIDATES: list[tuple[str, Callable[[str], Optional[str]]]] = [
    ("article", _match_article),
    ("content-container", _match_content_container),
    ("main", _match_main),
    ("body", _match_body),
]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_fragment(html: str) -> str:
    """Return the best-effort article body of *html*.

    Never raises; when no structural candidate matches the whole document is
    returned unchanged.
    """
    for name, candidate in CANDIDATES:
        fragment = candidate(html)
        if fragment is not None:
            logger.debug("Fragment taken from <%s> candidate (%d chars)", name, len(fragment))
            return fragment

    logger.debug("No structural candidate matched; using the whole document")
    return html
