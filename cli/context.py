"""Per-invocation state for the newsletter CLI.

The root callback resolves the global options once and stores a
:class:`ReaderContext` on ``typer.Context.obj``; commands read it back with
:func:`get_reader_context`.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Optional

import typer

from newsletter.config import settings


@dataclass
class ReaderContext:
    color: bool = False
    max_width: int = 80
    speakers: tuple[str, ...] = field(default_factory=tuple)


def resolve_color(flag: Optional[bool]) -> bool:
    """``--color``/``--no-color`` win; otherwise colour only on a TTY without NO_COLOR."""
    if flag is not None:
        return flag
    return settings.color_enabled and sys.stdout.isatty()


def build_context(color_flag: Optional[bool] = None) -> ReaderContext:
    return ReaderContext(
        color=resolve_color(color_flag),
        max_width=settings.max_width,
        speakers=settings.speakers,
    )


def get_reader_context(ctx: typer.Context) -> ReaderContext:
    """Return the context set up by the root callback (or defaults)."""
    root = ctx.find_root()
    if isinstance(root.obj, ReaderContext):
        return root.obj
    reader_ctx = build_context()
    root.obj = reader_ctx
    return reader_ctx
