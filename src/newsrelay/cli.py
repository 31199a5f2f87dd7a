"""
Command line interface powered by Typer.
"""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from .cache import SQLiteContentCache
from .config import Settings, load_settings
from .environment import Environment
from .errors import CacheError
from .manager import CommsManager
from .models import Tag
from .offline import OfflineTransport
from .online import OnlineTransport
from .reporting import render_contents, render_error, render_tags
from .system import System

app = typer.Typer(add_completion=False, no_args_is_help=True)
console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _build_system(settings: Settings) -> System:
    environment = Environment()
    cache = None
    if settings.content_online:
        try:
            cache = SQLiteContentCache(settings.cache_path)
        except CacheError as error:
            console.print(f"[red]{error}[/red]")
            raise typer.Exit(1) from error

    comms = CommsManager(
        settings.content_online,
        settings.message_online,
        settings.social_online,
        online=OnlineTransport(environment, settings),
        offline=OfflineTransport(settings.offline_delay),
        environment=environment,
    )
    system = System(cache=cache, page_size=settings.page_size, comms=comms, environment=environment)

    def report() -> None:
        if system.is_error_state:
            render_error(console, system.error_message)

    system.add_observer(report)
    return system


@app.callback()
def main_options(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging."),
) -> None:
    """
    Search The Guardian and share articles by email or on Reddit.
    """

    _configure_logging(verbose)


@app.command()
def tags(
    query: str = typer.Argument(..., help="Free text to search tags for."),
    online: bool = typer.Option(False, "--online/--offline", help="Use the live Guardian API."),
) -> None:
    """
    Search Guardian tags.
    """

    with _build_system(load_settings(content_online=online)) as system:
        results = system.get_tags(query)
        if system.error_message:
            raise typer.Exit(1)
        render_tags(console, results, query)


@app.command()
def content(
    tag_id: str = typer.Argument(..., help="Tag id, e.g. katine/football."),
    query: str = typer.Option("", "--query", "-q", help="Free text to narrow the search."),
    page: int = typer.Option(1, "--page", "-p", min=1, help="Result page to fetch."),
    use_cache: bool = typer.Option(True, "--cache/--no-cache", help="Serve from the local cache when possible."),
    online: bool = typer.Option(False, "--online/--offline", help="Use the live Guardian API."),
) -> None:
    """
    List articles for a tag.
    """

    tag = Tag(tag_id)
    with _build_system(load_settings(content_online=online)) as system:
        cached = use_cache and system.is_cached_content(tag, query, page)
        results = system.get_content(tag, query, page, use_cache)
        if system.error_message:
            raise typer.Exit(1)
        render_contents(console, results, tag, cached=cached)


@app.command()
def cached(
    tag_id: str = typer.Argument(..., help="Tag id, e.g. katine/football."),
    query: str = typer.Option("", "--query", "-q"),
    page: int = typer.Option(1, "--page", "-p", min=1),
) -> None:
    """
    Report whether live results for a tag/query/page are cached.
    """

    with _build_system(load_settings(content_online=True)) as system:
        if system.is_cached_content(Tag(tag_id), query, page):
            console.print("[green]Cached[/green]")
        else:
            console.print("[yellow]Not cached[/yellow]")


@app.command("clear-cache")
def clear_cache() -> None:
    """
    Remove every cached content page.
    """

    with _build_system(load_settings(content_online=True)) as system:
        system.clear_cache()
        if system.error_message:
            raise typer.Exit(1)
        console.print("[green]Content cache cleared.[/green]")


@app.command()
def email(
    tag_id: str = typer.Argument(..., help="Tag id whose articles are sent."),
    recipient: str = typer.Option(..., "--to", help="Address to send the digest to."),
    query: str = typer.Option("", "--query", "-q"),
    page: int = typer.Option(1, "--page", "-p", min=1),
    content_online: bool = typer.Option(False, "--guardian-online/--guardian-offline"),
    online: bool = typer.Option(False, "--online/--offline", help="Use the live SendGrid API."),
) -> None:
    """
    Email a digest of a tag's articles.
    """

    tag = Tag(tag_id)
    settings = load_settings(content_online=content_online, message_online=online)
    with _build_system(settings) as system:
        items = system.get_content(tag, query, page, use_cache=True)
        if not items or not system.send_email(tag, items, recipient):
            raise typer.Exit(1)
        console.print(f"[green]Sent {len(items)} article(s) to[/green] {recipient}")


@app.command()
def post(
    tag_id: str = typer.Argument(..., help="Tag id whose articles are posted."),
    username: str = typer.Option(..., "--user", "-u", help="Reddit username."),
    password: str = typer.Option(..., "--password", prompt=True, hide_input=True),
    query: str = typer.Option("", "--query", "-q"),
    page: int = typer.Option(1, "--page", "-p", min=1),
    content_online: bool = typer.Option(False, "--guardian-online/--guardian-offline"),
    online: bool = typer.Option(False, "--online/--offline", help="Use the live Reddit API."),
) -> None:
    """
    Post a digest of a tag's articles to your Reddit profile.
    """

    tag = Tag(tag_id)
    settings = load_settings(content_online=content_online, social_online=online)
    with _build_system(settings) as system:
        items = system.get_content(tag, query, page, use_cache=True)
        if not items or not system.authenticate_reddit(username, password):
            raise typer.Exit(1)
        if not system.post_reddit(tag, items):
            raise typer.Exit(1)
        console.print(f"[green]Posted {len(items)} article(s) to[/green] u/{username}")


@app.command("check-env")
def check_env(
    content_online: bool = typer.Option(True, "--guardian/--no-guardian"),
    message_online: bool = typer.Option(True, "--email/--no-email"),
) -> None:
    """
    Verify the environment variables required by the live APIs.
    """

    with _build_system(load_settings()) as system:
        if not system.check_environment(content_online, message_online):
            raise typer.Exit(1)
    console.print("[green]Environment looks good.[/green]")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
