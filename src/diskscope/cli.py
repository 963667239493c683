"""CLI interface for diskscope."""

import os
from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table

from diskscope import __version__
from diskscope.config import Settings, config_path, load_settings, save_settings
from diskscope.deleter import delete_entry, entry_for_path, is_protected_path
from diskscope.display import (
    confirm_action,
    console,
    show_delete_preview,
    show_delete_result,
    show_entries,
    show_scan_summary,
    show_stats,
)
from diskscope.errors import ConfigError
from diskscope.logging_setup import configure_logging
from diskscope.session import ExplorerSession

# Create Typer app
app = typer.Typer(
    name="diskscope",
    help="Browse a directory tree by size and delete what you don't need",
    add_completion=False,
)

SORT_CHOICES = ("size", "name")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"diskscope version {__version__}")
        raise typer.Exit()


def _settings(ctx: typer.Context) -> Settings:
    return ctx.obj["settings"]


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Show debug logging."),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        help="Settings file (defaults to the platform config directory).",
    ),
) -> None:
    """diskscope - see what takes up space, and clean it up."""
    configure_logging(verbose)

    try:
        settings = load_settings(config_file)
    except ConfigError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)

    ctx.obj = {"settings": settings, "config_file": config_file}


@app.command()
def scan(
    ctx: typer.Context,
    path: Path = typer.Argument(
        ...,
        exists=True,
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
        help="Directory to scan",
    ),
    show_all: bool = typer.Option(False, "--all", "-a", help="Show entries of any size"),
    hidden: bool = typer.Option(False, "--hidden", "-H", help="Include dot-prefixed entries"),
    min_size: Optional[int] = typer.Option(
        None, "--min-size", min=0, help="Hide entries smaller than this many bytes"
    ),
    sort: Optional[str] = typer.Option(None, "--sort", "-s", help="Sort by 'size' or 'name'"),
    search: str = typer.Option("", "--search", "-q", help="Only show names containing this text"),
    details: bool = typer.Option(False, "--details", "-d", help="Show directory statistics"),
) -> None:
    """Scan a directory and list its entries by size."""
    if sort is not None and sort not in SORT_CHOICES:
        console.print(f"[red]Unknown sort order: {sort}[/red] (use 'size' or 'name')")
        raise typer.Exit(1)

    session = ExplorerSession(_settings(ctx))
    update: dict = {"search_query": search, "show_all": show_all}
    if hidden:
        update["show_hidden"] = True
    if min_size is not None:
        update["min_size_bytes"] = min_size
    if sort is not None:
        update["sort_by_size"] = sort == "size"
    session.filters = session.filters.model_copy(update=update)

    with console.status(f"Scanning {path}..."):
        outcome = session.set_root(path)

    visible = session.visible_entries
    show_entries(visible, title=str(path), total_size=outcome.total_size)
    show_scan_summary(outcome, shown=len(visible))

    if details:
        console.print()
        show_stats(session.stats())


@app.command()
def delete(
    path: Path = typer.Argument(..., help="File or directory to delete"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Simulate without deleting"),
    yes: bool = typer.Option(False, "-y", "--yes", help="Skip confirmation prompt"),
) -> None:
    """Delete a file, or a directory and everything in it."""
    # Symbolic links are deleted themselves, never their targets
    path = Path(os.path.abspath(path))
    if not os.path.lexists(path):
        console.print(f"[red]No such file or directory: {escape(str(path))}[/red]")
        raise typer.Exit(1)

    if is_protected_path(path):
        console.print(f"[red]Refusing to delete protected path: {path}[/red]")
        raise typer.Exit(1)

    with console.status(f"Measuring {path}..."):
        entry = entry_for_path(path)

    show_delete_preview(entry, dry_run=dry_run)

    if not yes and not dry_run:
        if not confirm_action("Delete permanently?"):
            console.print("[yellow]Cancelled[/yellow]")
            raise typer.Exit(0)

    result = delete_entry(entry, dry_run=dry_run)
    show_delete_result(result)

    if not result.success:
        raise typer.Exit(1)


@app.command()
def browse(
    ctx: typer.Context,
    path: Path = typer.Argument(
        Path("."),
        exists=True,
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
        help="Root directory to browse",
    ),
    auto_refresh: bool = typer.Option(
        False, "--auto-refresh", help="Rescan the current directory periodically"
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Simulate deletions"),
) -> None:
    """Launch the interactive browser."""
    try:
        from diskscope.tui import run_tui
    except ImportError:
        console.print("[red]Interactive browser not available.[/red]")
        console.print("Install with: [bold]pip install diskscope[tui][/bold]")
        raise typer.Exit(1)

    run_tui(path, settings=_settings(ctx), auto_refresh=auto_refresh, dry_run=dry_run)


@app.command()
def config(
    ctx: typer.Context,
    init: bool = typer.Option(False, "--init", help="Write the current settings to the settings file"),
) -> None:
    """Show the active settings."""
    settings = _settings(ctx)
    path = ctx.obj["config_file"] or config_path()

    table = Table(title="Settings", show_header=True, header_style="bold")
    table.add_column("Name")
    table.add_column("Value", justify="right")
    for name, value in settings.model_dump().items():
        table.add_row(name, str(value))
    console.print(table)

    if init:
        written = save_settings(settings, path)
        console.print(f"\n[green]Settings written to {written}[/green]")
    else:
        console.print(f"\n[dim]Settings file: {path}[/dim]")


if __name__ == "__main__":
    app()
