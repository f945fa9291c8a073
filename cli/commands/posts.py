"""Commands for listing, searching and picking newsletter posts."""

import typer

from newsletter.feed import search_posts

from cli.commands.read import load_posts, show_post
from cli.context import get_reader_context
from cli.rendering import render_numbered_list, render_search_results, render_stats


def posts_list(
    ctx: typer.Context,
    limit: int = typer.Option(0, "--limit", "-n", min=0, help="Show at most N posts (0 = all)."),
) -> None:
    """List posts from the newsletter feed."""
    reader = get_reader_context(ctx)
    posts = load_posts()
    if limit:
        posts = posts[:limit]
    if not posts:
        typer.echo(render_stats(0, None, reader.color), color=reader.color)
        return
    typer.echo(render_numbered_list(posts, reader.color, reader.max_width), color=reader.color)


def posts_search(
    ctx: typer.Context,
    term: str = typer.Argument(..., help="Keyword to look for in titles and summaries."),
) -> None:
    """Search posts by keyword."""
    reader = get_reader_context(ctx)
    matches = search_posts(load_posts(), term)
    typer.echo(render_stats(len(matches), term, reader.color), color=reader.color)
    if matches:
        typer.echo("")
        typer.echo(render_search_results(matches, term, reader.color, reader.max_width), color=reader.color)


def posts_browse(ctx: typer.Context) -> None:
    """Show the post list, prompt for a number and read that post."""
    reader = get_reader_context(ctx)
    posts = load_posts()
    if not posts:
        typer.echo(render_stats(0, None, reader.color), color=reader.color)
        return

    typer.echo(render_numbered_list(posts, reader.color, reader.max_width), color=reader.color)
    typer.echo("")
    choice = typer.prompt("Select a post to read", type=int)
    if not 1 <= choice <= len(posts):
        typer.echo(f"❌ Pick a number between 1 and {len(posts)}.", err=True)
        raise typer.Exit(code=1)
    show_post(reader, posts[choice - 1])
