"""Custom widgets for the diskscope browser."""

from rich.markup import escape
from textual.widgets import Static

from diskscope.models import ScanOutcome, format_size


class PathBar(Static):
    """
    Breadcrumb trail from the root to the current directory.

    Each crumb is clickable, and the first nine are numbered for the
    number-key bindings on the browser screen.
    """

    def update_crumbs(self, crumbs: list[tuple[str, str]], can_go_up: bool) -> None:
        if not crumbs:
            self.update("[dim]No directory selected[/dim]")
            return

        up = "[bold]⬆[/bold] " if can_go_up else "[dim]⬆[/dim] "
        parts = []
        for i, (name, _) in enumerate(crumbs):
            number = f"[dim]{i + 1}:[/dim]" if i < 9 else ""
            parts.append(f"{number}[bold][@click=screen.jump_to_crumb({i})]{escape(name)}[/][/bold]")
        self.update(up + " [dim]>[/dim] ".join(parts))


class StatusBar(Static):
    """Total size, scan state and active filters."""

    def show_scanning(self, path: str) -> None:
        self.update(f"[cyan]Scanning {escape(path)}...[/cyan]")

    def show_outcome(
        self,
        outcome: ScanOutcome | None,
        total_size: int,
        shown: int,
        flags: list[str],
    ) -> None:
        parts = [f"[bold]Total: {format_size(total_size)}[/bold]", f"{shown} shown"]
        if outcome is not None:
            if outcome.error:
                parts.append(f"[yellow]unreadable: {escape(outcome.error)}[/yellow]")
            if outcome.skipped:
                parts.append(f"[yellow]{outcome.skipped} skipped[/yellow]")
            if outcome.truncated:
                parts.append(f"[yellow]{outcome.truncated} too deep[/yellow]")
            if outcome.from_cache:
                parts.append("[dim]cached[/dim]")
            if outcome.filters_mismatch:
                parts.append("[dim]stale filters, press r[/dim]")
        if flags:
            parts.append("[dim]" + ", ".join(flags) + "[/dim]")
        self.update("  │  ".join(parts))
