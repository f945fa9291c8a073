"""Newsletter reader CLI — entry-point for all commands.

Usage:
    python cli/main.py --help

Commands:
    list      → numbered list of posts from the feed
    search    → keyword search over titles and summaries
    read      → fetch one post (by number or URL) and print it
    browse    → list, prompt for a number, read
    render    → format a saved HTML page (no network)
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from newsletter.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from typing import Optional

import typer

from newsletter.config import VERSION
from newsletter.logging_setup import setup_logging

from cli.commands.posts import posts_browse, posts_list, posts_search
from cli.commands.read import read, render
from cli.context import build_context

app = typer.Typer(
    name="newsletter",
    help="Read the Jeremi and Luca newsletter in your terminal.",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"newsletter-reader {VERSION}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    color: Optional[bool] = typer.Option(
        None, "--color/--no-color", help="Force colours on or off (default: auto-detect)."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr."),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit."
    ),
) -> None:
    """Global options shared by every command."""
    setup_logging("DEBUG" if verbose else None)
    ctx.obj = build_context(color)


# ---------------------------------------------------------------------------
# Feed commands
# ---------------------------------------------------------------------------
app.command("list")(posts_list)
app.command("search")(posts_search)
app.command("browse")(posts_browse)

# ---------------------------------------------------------------------------
# Article commands
# ---------------------------------------------------------------------------
app.command("read")(read)
app.command("render")(render)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
