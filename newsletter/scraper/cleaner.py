"""Markup cleaning: turns an HTML fragment into terminal-ready plain text.

The pipeline is a fixed sequence of stages; later stages rely on what the
earlier ones removed (e.g. noise scrubs run on tag-free text), so the order
in :data:`STAGES` must not change.  Each stage is a pure ``str -> str``
function and can be exercised on its own.

Output conventions:

* headings become their text followed by a line of 50 ``=``
* ``<strong>``/``<em>`` become ``**bold**``/``*italic*``
* links become ``text (url)``
* paragraphs are separated by blank lines, never more than one in a row
"""

from __future__ import annotations

import re
from typing import Callable

SEPARATOR = "=" * 50

_FLAGS = re.IGNORECASE | re.DOTALL

# Whole elements dropped together with their content.
BLOCK_TAGS = ("script", "style", "nav", "footer", "header", "figure", "picture", "button")
NOISE_DIV_CLASSES = ("subscribe", "share", "author", "button")
VOID_TAGS = ("link", "meta", "img")

BYLINE_AUTHORS = ("Jeremi Nuer", "Luca Caviness")

_BLOCK_RES = [re.compile(rf"<{tag}\b[^>]*>.*?</{tag}\s*>", _FLAGS) for tag in BLOCK_TAGS]
_NOISE_DIV_RES = [
    re.compile(rf"<div\b[^>]*\bclass=[\"'][^\"']*{cls}[^\"']*[\"'][^>]*>.*?</div\s*>", _FLAGS)
    for cls in NOISE_DIV_CLASSES
]
_VOID_RE = re.compile(r"<(?:%s)\b[^>]*>" % "|".join(VOID_TAGS), re.IGNORECASE)

_HEADING_RE = re.compile(r"<h([1-6])\b[^>]*>(.*?)</h\1\s*>", _FLAGS)
_PARAGRAPH_RE = re.compile(r"<p\b[^>]*>(.*?)</p\s*>", _FLAGS)
_BR_RE = re.compile(r"<br\b[^>]*>", re.IGNORECASE)
_STRONG_RE = re.compile(r"<strong\b[^>]*>(.*?)</strong\s*>", _FLAGS)
_EM_RE = re.compile(r"<em\b[^>]*>(.*?)</em\s*>", _FLAGS)
_LINK_RE = re.compile(r"<a\b[^>]*\bhref=\"([^\"]*)\"[^>]*>(.*?)</a\s*>", _FLAGS)

_TAG_RE = re.compile(r"<[^>]*>")

_ENTITIES = {
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&#39;": "'",
}
_ENTITY_RE = re.compile("|".join(re.escape(e) for e in _ENTITIES))

_EXCESS_BLANK_LINES_RE = re.compile(r"\n\s*\n\s*\n")


def byline_pattern(authors: tuple[str, ...] = BYLINE_AUTHORS) -> re.Pattern[str]:
    """``"<author1> and <author2> <Month> <day>, <year>"``."""
    names = r"\s+and\s+".join(
        r"\s+".join(re.escape(part) for part in author.split()) for author in authors
    )
    return re.compile(names + r"\s+\w+\s+\d+,\s+\d+")


BYLINE_RE = byline_pattern()

# Literal scrubs over tag-free text, applied in order.
_NOISE_RULES: list[tuple[re.Pattern[str], str]] = [
    # Image CDN links left behind by converted <a> wrappers
    (re.compile(r"\(https://substackcdn\.com[^)]*\)"), ""),
    (re.compile(r"\(https://substack-post-media[^)]*\)"), ""),
    # Share / comment-count buttons
    (re.compile(r"Share\s*\(javascript:void\(0\)\)"), ""),
    (re.compile(r"\d+\s*\(https://[^)]*/comments\)"), ""),
    (re.compile(r"Previous\s*$"), ""),
    # Author profile links and the byline
    (re.compile(r"\(https://substack\.com/@[^)]*\)"), ""),
    (BYLINE_RE, ""),
    # Counters that end up glued to the start of a line
    (re.compile(r"^[ \t]*(?:\d+[ \t]*)+", re.MULTILINE), ""),
    (re.compile(r"\d+Welcome"), "Welcome"),
]


# ---------------------------------------------------------------------------
# Stages
# ---------------------------------------------------------------------------

def remove_blocks(text: str) -> str:
    """Drop non-content elements together with everything inside them."""
    for pattern in _BLOCK_RES:
        text = pattern.sub("", text)
    for pattern in _NOISE_DIV_RES:
        text = pattern.sub("", text)
    return text


def remove_void_tags(text: str) -> str:
    return _VOID_RE.sub("", text)


def _heading(m: re.Match[str]) -> str:
    return f"\n\n{m.group(2)}\n{SEPARATOR}\n"


def convert_structure(text: str) -> str:
    """Rewrite headings, paragraphs, line breaks, emphasis and links as text."""
    text = _HEADING_RE.sub(_heading, text)
    text = _PARAGRAPH_RE.sub(r"\n\1\n", text)
    text = _BR_RE.sub("\n", text)
    text = _STRONG_RE.sub(r"**\1**", text)
    text = _EM_RE.sub(r"*\1*", text)
    text = _LINK_RE.sub(r"\2 (\1)", text)
    return text


def strip_tags(text: str) -> str:
    return _TAG_RE.sub("", text)


def remove_platform_noise(text: str) -> str:
    """Scrub publishing-platform boilerplate from tag-free text."""
    for pattern, replacement in _NOISE_RULES:
        text = pattern.sub(replacement, text)
    return text


def decode_entities(text: str) -> str:
    # One pass: "&amp;lt;" decodes to "&lt;", not "<".
    return _ENTITY_RE.sub(lambda m: _ENTITIES[m.group(0)], text)


def normalize_whitespace(text: str) -> str:
    return _EXCESS_BLANK_LINES_RE.sub("\n\n", text).strip()


STAGES: list[Callable[[str], str]] = [
    remove_blocks,
    remove_void_tags,
    convert_structure,
    strip_tags,
    remove_platform_noise,
    decode_entities,
    normalize_whitespace,
]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def clean_html(fragment: str) -> str:
    """Run *fragment* through every cleaning stage and return the text."""
    text = fragment
    for stage in STAGES:
        text = stage(text)
    return text
