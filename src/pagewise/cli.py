"""Main CLI for pagewise."""

import logging
import typer
from pathlib import Path
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from typing import Optional

from .errors import InvalidConfiguration
from .output import format_response, render_cli
from .pager_config import (
    PagerSettings,
    create_pager_config,
    get_settings_help_message,
    resolve_settings,
)
from .paginator import Paginator

app = typer.Typer(
    name="pagewise",
    help="Pagewise - pagination arithmetic for paged views",
)
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Compute page bounds, indices and slices."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


def get_settings(path: Optional[Path] = None) -> PagerSettings:
    """Resolve settings or exit with error."""
    try:
        return resolve_settings(path)
    except InvalidConfiguration as e:
        console.print(f"[red]Configuration Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


def build_paginator(
    total: int,
    per_page: Optional[int],
    page: Optional[int],
    settings: PagerSettings,
) -> Paginator:
    """Build a paginator from CLI arguments or exit with error."""
    try:
        return Paginator(
            total,
            per_page if per_page is not None else settings.entries_per_page,
            page,
        )
    except InvalidConfiguration as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


def print_response(response: dict) -> None:
    """Print a formatted response verbatim (no markup, highlighting or wrapping)."""
    console.print(
        render_cli(response),
        markup=False,
        highlight=False,
        emoji=False,
        soft_wrap=True,
    )


# ============================================================================
# Pagination Commands
# ============================================================================


@app.command("show")
def show(
    total: int = typer.Option(..., "--total", "-t", help="Total number of entries"),
    per_page: Optional[int] = typer.Option(None, "--per-page", "-n", help="Entries per page"),
    page: Optional[int] = typer.Option(None, "--page", "-p", help="Current page (clamped)"),
    full: Optional[bool] = typer.Option(None, "--full/--compact", help="Include derived values"),
    output_format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format (toon|json|text)"),
):
    """Show the pagination view for a set of entries.

    The compact view holds the three inputs; --full adds the last page,
    neighbour pages, indices and item numbers.
    """
    settings = get_settings()
    pager = build_paginator(total, per_page, page, settings)
    show_full = settings.full if full is None else full
    data = pager.to_full_dict() if show_full else pager.to_dict()
    response = format_response(data, output_format or settings.output_format)
    print_response(response)


@app.command("pages")
def pages(
    total: int = typer.Option(..., "--total", "-t", help="Total number of entries"),
    per_page: Optional[int] = typer.Option(None, "--per-page", "-n", help="Entries per page"),
):
    """List every page with its item range."""
    settings = get_settings()
    pager = build_paginator(total, per_page, 1, settings)

    if pager.last_page == 0:
        console.print("[yellow]No entries to paginate.[/yellow]")
        return

    table = Table(title=f"{pager.total_entries} entries, {pager.entries_per_page} per page")
    table.add_column("Page", justify="right", style="cyan")
    table.add_column("First item", justify="right")
    table.add_column("Last item", justify="right")
    table.add_column("Entries", justify="right")

    for number in range(1, pager.last_page + 1):
        pager.current_page = number
        table.add_row(
            str(number),
            str(pager.first_item),
            str(pager.last_item),
            str(pager.entries_on_this_page),
        )

    console.print(table)


@app.command("slice")
def slice_items(
    items: list[str] = typer.Argument(..., help="Entries to paginate"),
    per_page: Optional[int] = typer.Option(None, "--per-page", "-n", help="Entries per page"),
    page: Optional[int] = typer.Option(None, "--page", "-p", help="Current page (clamped)"),
    output_format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format (toon|json|text)"),
):
    """Print the entries that belong on the requested page."""
    settings = get_settings()
    pager = build_paginator(len(items), per_page, page, settings)
    data = {"items": pager.slice(items), "pagination": pager}
    response = format_response(
        data,
        output_format or settings.output_format,
        text_renderer=lambda payload: "\n".join(payload["items"]),
    )
    print_response(response)


# ============================================================================
# Config Commands
# ============================================================================


@app.command("config")
def show_config(
    path: Optional[Path] = typer.Option(None, "--path", help="Path to resolve settings for"),
    output_format: str = typer.Option("text", "--format", "-f", help="Output format (toon|json|text)"),
):
    """Show resolved pager settings for current or specified directory."""
    settings = get_settings(path or Path.cwd())
    response = format_response(
        settings.to_dict(),
        output_format,
        text_renderer=lambda _: get_settings_help_message(settings),
    )
    print_response(response)


@app.command("init")
def init_config(
    path: Optional[Path] = typer.Option(None, "--path", help="Directory to initialize"),
    per_page: Optional[int] = typer.Option(None, "--per-page", "-n", help="Default entries per page"),
    output_format: Optional[str] = typer.Option(None, "--format", "-f", help="Default output format"),
    full: Optional[bool] = typer.Option(None, "--full/--compact", help="Emit the full view by default"),
):
    """Initialize .pagewise/config.json in current or specified directory."""
    target_path = Path(path) if path else Path.cwd()

    if not target_path.exists():
        console.print(f"[red]Error:[/red] Directory not found: {escape(str(target_path))}")
        raise typer.Exit(1)

    try:
        config_path = create_pager_config(
            target_path,
            entries_per_page=per_page,
            output_format=output_format,
            full=full,
        )
    except InvalidConfiguration as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    console.print(f"\n[green]Created:[/green] {config_path}")


if __name__ == "__main__":
    app()
