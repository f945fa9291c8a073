"""Utilities for rendering posts and articles in the terminal.

Every function takes ``color`` explicitly; with ``color=False`` the output is
plain text with no escape sequences.
"""

from __future__ import annotations

import re
from typing import List, Optional, Sequence

import typer

from newsletter.feed import Post
from newsletter.formatter import DEFAULT_SPEAKERS, LineRole, Span, StyledLine, format_text

BULLET = "•"
ELLIPSIS = "…"

# Role -> (foreground, bold, italic)
_ROLE_STYLES = {
    LineRole.TITLE: ("cyan", True, False),
    LineRole.SUBTITLE: (None, False, True),
    LineRole.DIALOGUE_LABEL: ("green", True, False),
    LineRole.BODY: (None, False, False),
}


def _style(text: str, color: bool, **kwargs) -> str:
    return typer.style(text, **kwargs) if color else text


def truncate(text: str, width: int) -> str:
    """Cut *text* to *width* characters, ending with an ellipsis when cut."""
    if width <= 0:
        return ""
    if len(text) <= width:
        return text
    return text[: width - 1] + ELLIPSIS


def format_date(post: Post) -> str:
    return post.published.strftime("%Y-%m-%d") if post.published else "undated"


def separator(color: bool, width: int = 80, char: str = "─") -> str:
    return _style(char * width, color, fg="bright_black")


# ---------------------------------------------------------------------------
# Post lists
# ---------------------------------------------------------------------------

def render_numbered_list(posts: Sequence[Post], color: bool, max_width: int = 80) -> str:
    """Render posts as ``N. Title  (date)`` lines for selection."""
    lines = []
    for index, post in enumerate(posts, start=1):
        number = _style(f"{index}.", color, fg="cyan")
        title = _style(truncate(post.title, max_width - 25), color, bold=True)
        date = _style(f"({format_date(post)})", color, dim=True)
        lines.append(f"{number} {title}  {date}")
    return "\n".join(lines)


def _highlight(title: str, term: str, color: bool) -> str:
    if not color or not term:
        return title
    pattern = re.compile(f"({re.escape(term)})", re.IGNORECASE)
    return pattern.sub(lambda m: typer.style(m.group(1), fg="yellow", bold=True), title)


def render_search_results(
    posts: Sequence[Post], term: str, color: bool, max_width: int = 80
) -> str:
    """Render matching posts with *term* highlighted in each title."""
    bullet = _style(BULLET, color, fg="bright_black")
    lines = []
    for post in posts:
        title = _highlight(truncate(post.title, max_width - 20), term, color)
        date = _style(f"({format_date(post)})", color, dim=True)
        url = _style(post.link, color, dim=True)
        lines.append(f"{bullet} {title}  {date}\n   {url}")
    return "\n".join(lines)


def render_post_summary(post: Post, color: bool, max_width: int = 80) -> str:
    title = _style(post.title, color, fg="cyan", bold=True)
    date = _style(f"Published: {format_date(post)}", color, dim=True)
    parts = [title, date]
    if post.snippet:
        parts.append(_style(truncate(post.snippet, max_width - 4), color, dim=True))
    parts.append(_style(post.link, color, fg="blue", underline=True))
    return "\n".join(parts)


def render_stats(count: int, term: Optional[str], color: bool) -> str:
    search_text = f' for "{term}"' if term else ""
    if count == 0:
        return _style(f"No posts found{search_text}", color, fg="yellow")
    plural = "" if count == 1 else "s"
    return _style(f"Found {count} post{plural}{search_text}", color, fg="green")


# ---------------------------------------------------------------------------
# Articles
# ---------------------------------------------------------------------------

def _render_span(span: Span, fg: Optional[str], bold: bool, italic: bool) -> str:
    return typer.style(
        span.text,
        fg=fg,
        bold=bold or span.bold,
        italic=italic or span.italic,
    )


def render_styled_lines(lines: Sequence[StyledLine]) -> str:
    """Turn classified lines into ANSI-styled text; suppressed lines vanish."""
    out: List[str] = []
    for line in lines:
        if line.role is LineRole.SUPPRESSED:
            continue
        if line.blank_before:
            out.append("")
        fg, bold, italic = _ROLE_STYLES[line.role]
        out.append("".join(_render_span(span, fg, bold, italic) for span in line.spans if span.text))
    return "\n".join(out)


def render_article(
    text: str, color: bool, speakers: Sequence[str] = DEFAULT_SPEAKERS
) -> str:
    """Render cleaned article *text*; without colour it is returned as-is."""
    if not color:
        return text
    return render_styled_lines(format_text(text, speakers=speakers))
