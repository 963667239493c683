"""Screens for the diskscope browser."""

from typing import Callable, Optional

from rich.markup import escape
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, Vertical
from textual.screen import ModalScreen, Screen
from textual.widgets import Button, DataTable, Footer, Header, Input, Label, Static

from diskscope.models import DeleteResult, FileEntry, ScanOutcome
from diskscope.tui.widgets import PathBar, StatusBar


class ConfirmDeleteScreen(ModalScreen[bool]):
    """Ask before deleting an entry."""

    BINDINGS = [
        Binding("y", "confirm", "Yes, Delete"),
        Binding("n", "cancel", "Cancel"),
        Binding("escape", "cancel", "Cancel"),
    ]

    def __init__(self, entry: FileEntry, dry_run: bool = False):
        super().__init__()
        self.entry = entry
        self.dry_run = dry_run

    def compose(self) -> ComposeResult:
        kind = "directory" if self.entry.is_directory else "file"
        with Vertical(id="confirm-dialog"):
            yield Label("[bold red]Confirm Deletion[/bold red]")
            yield Label(f"Delete {kind} [bold]{escape(self.entry.name)}[/bold] ({self.entry.size_human})?")
            if self.dry_run:
                yield Label("[yellow]DRY RUN - nothing will be deleted[/yellow]")
            with Horizontal(id="confirm-buttons"):
                yield Button("Yes", variant="error", id="btn-yes")
                yield Button("No", variant="default", id="btn-no")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn-yes":
            self.action_confirm()
        else:
            self.action_cancel()

    def action_confirm(self) -> None:
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)


class StatsScreen(ModalScreen[None]):
    """Directory statistics for the current listing."""

    BINDINGS = [Binding("escape", "close", "Close"), Binding("i", "close", "Close")]

    def compose(self) -> ComposeResult:
        stats = self.app.session.stats()
        with Vertical(id="stats-dialog"):
            yield Label("[bold]Directory Statistics[/bold]")
            yield Static(
                f"Total items: {stats.total_items}\n"
                f"Total size:  {stats.size_human}\n"
                f"Files:       {stats.file_count}\n"
                f"Directories: {stats.dir_count}"
            )
            yield Button("Close", id="btn-close")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.action_close()

    def action_close(self) -> None:
        self.dismiss(None)


class BrowserScreen(Screen):
    """Directory listing with search, filters and delete."""

    BINDINGS = [
        Binding("backspace", "go_up", "Up"),
        Binding("r", "refresh", "Refresh"),
        Binding("s", "toggle_sort", "Sort"),
        Binding("a", "toggle_show_all", "Show All"),
        Binding("h", "toggle_hidden", "Hidden"),
        Binding("x", "delete", "Delete"),
        Binding("i", "details", "Details"),
        Binding("t", "toggle_auto_refresh", "Auto Refresh"),
        Binding("slash", "focus_search", "Search", show=False),
    ] + [Binding(str(n), f"jump_to_crumb({n - 1})", f"Crumb {n}", show=False) for n in range(1, 10)]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._rows: list[FileEntry] = []

    def compose(self) -> ComposeResult:
        yield Header()

        with Container(id="browser-container"):
            yield PathBar(id="path-bar")
            yield Input(placeholder="Search names...", id="search")
            yield DataTable(id="entry-table")
            yield StatusBar(id="status-bar")

        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one("#entry-table", DataTable)
        table.cursor_type = "row"
        table.add_columns("", "Name", "Size")
        table.focus()

        self.refresh_data()
        # Cheap when nothing is due; the session decides whether to rescan
        self.set_interval(5, self._auto_refresh_tick)

    # Scanning

    def refresh_data(self, force: bool = False) -> None:
        """Rescan the current directory."""
        self._start_scan(lambda: self.app.session.refresh(force=force))

    def _start_scan(self, job: Callable[[], Optional[ScanOutcome]]) -> None:
        session = self.app.session
        if session.current:
            self.query_one("#status-bar", StatusBar).show_scanning(session.current)
        self.run_worker(lambda: self._scan_worker(job), thread=True, exclusive=True, group="scan")

    def _scan_worker(self, job: Callable[[], Optional[ScanOutcome]]) -> None:
        outcome = job()
        if outcome is None:
            return
        self.app.call_from_thread(self._update_table, outcome)

    def _auto_refresh_tick(self) -> None:
        session = self.app.session
        if session.auto_refresh and not session.scanning:
            self.run_worker(
                lambda: self._scan_worker(session.tick), thread=True, group="auto-refresh"
            )

    # Rendering

    def _update_table(self, outcome: Optional[ScanOutcome] = None) -> None:
        """Redraw the table from the session's visible entries."""
        session = self.app.session
        table = self.query_one("#entry-table", DataTable)

        table.clear()
        self._rows = session.visible_entries
        for entry in self._rows:
            icon = "📁" if entry.is_directory else "📄"
            name = escape(entry.name)
            if entry.is_directory:
                name = f"[bold blue]{name}[/bold blue]"
            table.add_row(icon, name, entry.size_human, key=entry.path)

        self.query_one("#path-bar", PathBar).update_crumbs(
            session.breadcrumbs(), session.navigator.can_go_up()
        )
        self.query_one("#status-bar", StatusBar).show_outcome(
            outcome or session.last_outcome,
            session.total_size,
            len(self._rows),
            self._flags(),
        )

    def _flags(self) -> list[str]:
        session = self.app.session
        filters = session.filters
        flags = ["by size" if filters.sort_by_size else "by name"]
        if filters.show_all:
            flags.append("all sizes")
        if filters.show_hidden:
            flags.append("hidden shown")
        if session.auto_refresh:
            flags.append("auto refresh")
        if self.app.dry_run:
            flags.append("dry run")
        return flags

    def _selected_entry(self) -> Optional[FileEntry]:
        table = self.query_one("#entry-table", DataTable)
        row = table.cursor_row
        if row is None or not (0 <= row < len(self._rows)):
            return None
        return self._rows[row]

    # Events

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        """Enter a directory when its row is selected."""
        entry = self._selected_entry()
        if entry is None or not entry.is_directory:
            return
        self._start_scan(lambda: self.app.session.navigate_to(entry.path))

    def on_input_changed(self, event: Input.Changed) -> None:
        """Search the current listing as the user types."""
        if event.input.id != "search":
            return
        self.app.session.set_search(event.value)
        self._update_table()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.query_one("#entry-table", DataTable).focus()

    # Actions

    def action_go_up(self) -> None:
        if not self.app.session.navigator.can_go_up():
            self.notify("Already at the root", timeout=2)
            return
        self._start_scan(self.app.session.go_up)

    def action_jump_to_crumb(self, index: int) -> None:
        """Jump to an ancestor shown in the path bar."""
        session = self.app.session
        # The last crumb is the current directory
        if not 0 <= index < len(session.breadcrumbs()) - 1:
            return
        self._start_scan(lambda: session.jump_to_crumb(index))

    def action_refresh(self) -> None:
        self.refresh_data(force=True)

    def action_toggle_sort(self) -> None:
        session = self.app.session
        session.set_sort_by_size(not session.filters.sort_by_size)
        self._update_table()

    def action_toggle_show_all(self) -> None:
        session = self.app.session
        show_all = not session.filters.show_all
        self._start_scan(lambda: session.apply_filters(show_all=show_all))

    def action_toggle_hidden(self) -> None:
        session = self.app.session
        show_hidden = not session.filters.show_hidden
        self._start_scan(lambda: session.apply_filters(show_hidden=show_hidden))

    def action_toggle_auto_refresh(self) -> None:
        session = self.app.session
        session.auto_refresh = not session.auto_refresh
        state = "on" if session.auto_refresh else "off"
        self.notify(f"Auto refresh {state}", timeout=2)
        self._update_table()

    def action_details(self) -> None:
        self.app.push_screen(StatsScreen())

    def action_focus_search(self) -> None:
        self.query_one("#search", Input).focus()

    def action_delete(self) -> None:
        entry = self._selected_entry()
        if entry is None:
            self.notify("Nothing selected", severity="warning")
            return

        def handle(confirmed: bool | None) -> None:
            if confirmed:
                self.run_worker(lambda: self._delete_worker(entry), thread=True)

        self.app.push_screen(ConfirmDeleteScreen(entry, dry_run=self.app.dry_run), handle)

    def _delete_worker(self, entry: FileEntry) -> None:
        result = self.app.session.delete(entry, dry_run=self.app.dry_run)
        self.app.call_from_thread(self._show_delete_result, result)

    def _show_delete_result(self, result: DeleteResult) -> None:
        if not result.success:
            self.notify(result.error or "Delete failed", severity="error", timeout=5)
            return
        if self.app.dry_run:
            self.notify(f"Dry run: would free {result.bytes_freed} bytes", timeout=3)
        else:
            self.notify(f"Deleted {result.path}", timeout=3)
        self._update_table()
