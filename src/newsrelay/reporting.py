"""
Rendering utilities for terminal output.
"""

from __future__ import annotations

from typing import Optional, Sequence

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .models import Content, Tag


def _page_caption(items: Sequence[Content]) -> Optional[str]:
    if not items:
        return None
    first = items[0]
    return f"page {first.page} of {first.total_pages}"


def render_tags(console: Console, tags: Sequence[Tag], query: str) -> None:
    if not tags:
        console.print(f"[yellow]No tags found for[/yellow] [italic]{query}[/italic]")
        return

    table = Table(
        title=f"Tags matching '{query}'",
        box=box.SIMPLE_HEAVY,
        header_style="bold cyan",
    )
    table.add_column("ID", style="bold")
    table.add_column("Type")
    table.add_column("Title")
    table.add_column("URL", overflow="fold", style="dim")
    for tag in tags:
        table.add_row(tag.id, tag.type, tag.web_title, tag.web_url)
    console.print(table)


def render_contents(
    console: Console,
    items: Sequence[Content],
    tag: Tag,
    *,
    title: Optional[str] = None,
    cached: bool = False,
) -> None:
    if not items:
        console.print(f"[yellow]No articles found for tag[/yellow] {tag.id}")
        return

    heading = title or f"Articles for {tag.id}"
    if cached:
        heading += " (cached)"
    table = Table(
        title=heading,
        caption=_page_caption(items),
        box=box.SIMPLE_HEAVY,
        header_style="bold cyan",
    )
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Title", ratio=3)
    table.add_column("Section")
    table.add_column("Published", style="green")
    for index, item in enumerate(items, start=1):
        headline = Text(item.web_title, style=f"link {item.web_url}" if item.web_url else "")
        table.add_row(str(index), headline, item.section_name, item.web_publication_date)
    console.print(table)


def render_error(console: Console, message: Optional[str]) -> None:
    if message:
        console.print(f"[red]{message}[/red]")
