"""Line-by-line structural formatter for cleaned article text.

The formatter walks the text once, top to bottom, and assigns each line a
:class:`LineRole`.  It carries a tiny state machine::

    NOT_STARTED --(first non-blank line)--> TITLE_FOUND
    TITLE_FOUND --(next non-blank, non-separator line)--> SUBTITLE_FOUND

The state only ever moves forward.  Once ``SUBTITLE_FOUND`` is reached every
remaining line is a body line, a dialogue label, or suppressed noise.

Styling (colours, weights) is not decided here; the renderer maps roles and
inline spans to terminal styles.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from itertools import groupby
from typing import Iterable, List, Sequence

from newsletter.scraper.cleaner import BYLINE_RE

DEFAULT_SPEAKERS = ("Jeremi", "Luca")
WELCOME_PHRASE = "Welcome back to Jeremi and Luca"
SEPARATOR_MIN_LENGTH = 20

_BOLD_RE = re.compile(r"\*\*(.*?)\*\*")
_ITALIC_RE = re.compile(r"(?<!\*)\*([^*]+)\*(?!\*)")


class FormatterState(enum.Enum):
    NOT_STARTED = "not_started"
    TITLE_FOUND = "title_found"
    SUBTITLE_FOUND = "subtitle_found"


class LineRole(enum.Enum):
    TITLE = "title"
    SUBTITLE = "subtitle"
    DIALOGUE_LABEL = "dialogue_label"
    BODY = "body"
    SUPPRESSED = "suppressed"


@dataclass(frozen=True)
class Span:
    """A run of text sharing the same inline emphasis."""

    text: str
    bold: bool = False
    italic: bool = False


@dataclass(frozen=True)
class StyledLine:
    role: LineRole
    spans: tuple[Span, ...] = ()
    blank_before: bool = False

    @property
    def text(self) -> str:
        return "".join(span.text for span in self.spans)


# ---------------------------------------------------------------------------
# Line helpers
# ---------------------------------------------------------------------------

def _split(pattern: re.Pattern[str], text: str) -> list[tuple[str, bool]]:
    """Split *text* into ``(chunk, matched)`` pairs around *pattern*."""
    parts: list[tuple[str, bool]] = []
    pos = 0
    for m in pattern.finditer(text):
        if m.start() > pos:
            parts.append((text[pos:m.start()], False))
        parts.append((m.group(1), True))
        pos = m.end()
    if pos < len(text):
        parts.append((text[pos:], False))
    return parts


def parse_inline(line: str) -> tuple[Span, ...]:
    """Turn ``**bold**`` and ``*italic*`` markers into spans.

    Bold markers are resolved first and italic markers are then matched over
    the whole remaining line, so emphasis nests either way round:
    ``*a **b** c*`` and ``**a *b* c**`` both yield a bold-italic ``b``.
    """
    chars: list[tuple[str, bool]] = []
    for chunk, bold in _split(_BOLD_RE, line):
        chars.extend((ch, bold) for ch in chunk)

    text = "".join(ch for ch, _ in chars)
    italic = [False] * len(text)
    markers: set[int] = set()
    for m in _ITALIC_RE.finditer(text):
        markers.update((m.start(), m.end() - 1))
        italic[m.start(1):m.end(1)] = [True] * (m.end(1) - m.start(1))

    styled = [
        (ch, bold, italic[i]) for i, (ch, bold) in enumerate(chars) if i not in markers
    ]
    return tuple(
        Span("".join(ch for ch, _, _ in run), bold=b, italic=i)
        for (b, i), run in groupby(styled, key=lambda c: (c[1], c[2]))
    )


def is_blank(line: str) -> bool:
    return not line.strip()


def is_separator(line: str) -> bool:
    """A heading underline or stray rule: contains ``=`` and is long."""
    return "=" in line and len(line) > SEPARATOR_MIN_LENGTH


def _uppercase(spans: Iterable[Span]) -> tuple[Span, ...]:
    return tuple(Span(s.text.upper(), bold=s.bold, italic=s.italic) for s in spans)


def _compile_speakers(speakers: Sequence[str]) -> re.Pattern[str] | None:
    if not speakers:
        return None
    return re.compile(r"^(?:%s):" % "|".join(re.escape(name) for name in speakers))


# ---------------------------------------------------------------------------
# State machine
# ---------------------------------------------------------------------------

@dataclass
class ArticleFormatter:
    """Classifies lines of one document; create a fresh instance per document."""

    speakers: Sequence[str] = DEFAULT_SPEAKERS
    welcome_phrase: str = WELCOME_PHRASE
    byline_re: re.Pattern[str] = BYLINE_RE
    state: FormatterState = FormatterState.NOT_STARTED
    _speaker_re: re.Pattern[str] | None = field(init=False, repr=False, default=None)

    def __post_init__(self) -> None:
        self._speaker_re = _compile_speakers(self.speakers)

    def feed(self, line: str) -> StyledLine:
        """Classify a single line and advance the state if needed."""
        blank = is_blank(line)

        if self.state is FormatterState.TITLE_FOUND and blank:
            return StyledLine(LineRole.SUPPRESSED)

        spans = parse_inline(line)

        if self._speaker_re is not None and self._speaker_re.match(line):
            return StyledLine(LineRole.DIALOGUE_LABEL, spans)

        if self.state is FormatterState.NOT_STARTED and not blank:
            self.state = FormatterState.TITLE_FOUND
            return StyledLine(LineRole.TITLE, _uppercase(spans))

        if self.state is FormatterState.TITLE_FOUND:
            if not is_separator(line):
                self.state = FormatterState.SUBTITLE_FOUND
                return StyledLine(LineRole.SUBTITLE, spans)
            return StyledLine(LineRole.SUPPRESSED)

        if self.welcome_phrase in line and self.state is FormatterState.SUBTITLE_FOUND:
            return StyledLine(LineRole.BODY, spans, blank_before=True)

        if self.byline_re.search(line):
            return StyledLine(LineRole.SUPPRESSED)

        return StyledLine(LineRole.BODY, spans)

    def format(self, text: str) -> List[StyledLine]:
        return [self.feed(line) for line in text.split("\n")]


def format_text(text: str, speakers: Sequence[str] = DEFAULT_SPEAKERS) -> List[StyledLine]:
    """Classify every line of *text* with a fresh :class:`ArticleFormatter`."""
    return ArticleFormatter(speakers=speakers).format(text)
