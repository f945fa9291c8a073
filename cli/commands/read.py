"""Commands that fetch, clean and print an article."""

import sys
from pathlib import Path
from typing import List

import typer

from newsletter.feed import Post, fetch_posts
from newsletter.scraper import FetchError, fetch_url, html_to_text

from cli.context import ReaderContext, get_reader_context
from cli.rendering import render_article, render_post_summary, separator


def print_article(reader: ReaderContext, html: str) -> None:
    """Run *html* through the extraction pipeline and print the result."""
    text = html_to_text(html)
    if not text:
        typer.echo("⚠️ No readable content found on this page.")
        return
    typer.echo(render_article(text, reader.color, reader.speakers), color=reader.color)


def fetch_article(url: str) -> str:
    try:
        return fetch_url(url).html
    except FetchError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(code=1)


def show_post(reader: ReaderContext, post: Post) -> None:
    """Print a post's summary header followed by its full article."""
    html = fetch_article(post.link)
    typer.echo(render_post_summary(post, reader.color, reader.max_width), color=reader.color)
    typer.echo(separator(reader.color, reader.max_width), color=reader.color)
    typer.echo("")
    print_article(reader, html)


def load_posts() -> List[Post]:
    """Fetch the feed, converting failures into a CLI exit."""
    try:
        return fetch_posts()
    except FetchError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(code=1)


def _post_by_number(number: int) -> Post:
    posts = load_posts()
    if not 1 <= number <= len(posts):
        typer.echo(f"❌ No post #{number}; the feed has {len(posts)} post(s).", err=True)
        raise typer.Exit(code=1)
    return posts[number - 1]


def read(
    ctx: typer.Context,
    target: str = typer.Argument(..., help="Post number (as shown by 'list') or a post URL."),
) -> None:
    """Fetch a post and print it formatted for the terminal."""
    reader = get_reader_context(ctx)
    if target.isdigit():
        show_post(reader, _post_by_number(int(target)))
        return
    if not target.startswith(("http://", "https://")):
        typer.echo(f"❌ Invalid target: {target}", err=True)
        raise typer.Exit(code=1)
    print_article(reader, fetch_article(target))


def render(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Local HTML file, or '-' for stdin."),
    plain: bool = typer.Option(False, "--text", help="Print the cleaned text without formatting."),
) -> None:
    """Format a saved HTML page without touching the network."""
    reader = get_reader_context(ctx)
    if path == "-":
        html = sys.stdin.read()
    else:
        file = Path(path)
        if not file.is_file():
            typer.echo(f"❌ File not found: {path}", err=True)
            raise typer.Exit(code=1)
        html = file.read_text(encoding="utf-8", errors="replace")

    if plain:
        typer.echo(html_to_text(html))
        return
    print_article(reader, html)
