"""Rich terminal display for diskscope."""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from diskscope.models import (
    DeleteResult,
    DirectoryStats,
    FileEntry,
    ScanOutcome,
    format_size,
)

console = Console()

__all__ = [
    "confirm_action",
    "console",
    "format_size",
    "show_delete_preview",
    "show_delete_result",
    "show_entries",
    "show_scan_summary",
    "show_stats",
]


def entry_icon(entry: FileEntry) -> str:
    """Icon for a directory or file row."""
    return "[blue]📁[/blue]" if entry.is_directory else "📄"


def show_entries(entries: list[FileEntry], title: str, total_size: int) -> None:
    """Display an entry list with sizes and share of the total."""
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("", width=3)
    table.add_column("Name")
    table.add_column("Size", justify="right")
    table.add_column("Share", justify="right")

    for entry in entries:
        share = (entry.size / total_size) * 100 if total_size > 0 else 0
        name = escape(entry.name)
        if entry.is_directory:
            name = f"[bold blue]{name}/[/bold blue]"
        table.add_row(entry_icon(entry), name, entry.size_human, f"{share:.0f}%")

    console.print(table)


def show_scan_summary(outcome: ScanOutcome, shown: int) -> None:
    """Display the total and any soft failures from a scan."""
    console.print(f"\n[bold]Total size: {outcome.size_human}[/bold] ({shown} of {len(outcome.entries)} entries shown)")

    if outcome.error:
        console.print(f"[yellow]Could not read directory: {escape(outcome.error)}[/yellow]")
    if outcome.skipped:
        console.print(f"[yellow]{outcome.skipped} unreadable items were not counted[/yellow]")
    if outcome.truncated:
        console.print(
            f"[yellow]{outcome.truncated} directories below the depth limit were not counted[/yellow]"
        )
    if outcome.from_cache:
        console.print("[dim]Result served from cache[/dim]")
    if outcome.filters_mismatch:
        console.print("[dim]Cached result used different filters; refresh to apply the current ones[/dim]")


def show_stats(stats: DirectoryStats) -> None:
    """Display directory statistics."""
    table = Table(show_header=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("Total items", str(stats.total_items))
    table.add_row("Total size", stats.size_human)
    table.add_row("Files", str(stats.file_count))
    table.add_row("Directories", str(stats.dir_count))

    console.print(Panel(table, title="Directory Statistics", expand=False))


def show_delete_preview(entry: FileEntry, dry_run: bool = False) -> None:
    """Display what is about to be deleted."""
    if dry_run:
        console.print("[yellow]DRY RUN - Nothing will be deleted[/yellow]\n")

    kind = "Directory" if entry.is_directory else "File"
    console.print(
        Panel(
            f"[bold]{escape(entry.path)}[/bold]\n{kind}, {entry.size_human}",
            title="[bold red]Delete[/bold red]",
            border_style="red",
        )
    )


def show_delete_result(result: DeleteResult) -> None:
    """Display result of a delete operation."""
    if result.success:
        console.print(f"  [green]✓[/green] {escape(result.path)}: {format_size(result.bytes_freed)} freed")
    else:
        console.print(f"  [red]✗[/red] {escape(result.path)}: {escape(result.error or '')}")


def confirm_action(message: str) -> bool:
    """Ask for confirmation."""
    from rich.prompt import Confirm

    return Confirm.ask(message)
