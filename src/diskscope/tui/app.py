"""Main TUI application for diskscope."""

from pathlib import Path
from typing import Optional

from textual.app import App
from textual.binding import Binding

from diskscope.config import Settings
from diskscope.session import ExplorerSession
from diskscope.tui.screens import BrowserScreen


class DiskscopeApp(App):
    """Interactive directory size browser."""

    TITLE = "diskscope"
    SUB_TITLE = "Disk Space Browser"

    CSS = """
    #path-bar {
        height: 1;
        padding: 0 1;
    }
    #search {
        margin: 0 1;
    }
    #entry-table {
        height: 1fr;
    }
    #status-bar {
        height: 1;
        padding: 0 1;
        background: $panel;
    }
    #confirm-dialog, #stats-dialog {
        width: 60;
        height: auto;
        padding: 1 2;
        border: thick $error;
        background: $surface;
    }
    #stats-dialog {
        border: thick $primary;
    }
    ConfirmDeleteScreen, StatsScreen {
        align: center middle;
    }
    #confirm-buttons {
        height: auto;
        margin-top: 1;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("?", "help", "Help"),
    ]

    def __init__(
        self,
        root: Path,
        settings: Optional[Settings] = None,
        auto_refresh: bool = False,
        dry_run: bool = False,
    ):
        super().__init__()
        self.root_path = root
        self.dry_run = dry_run
        self.session = ExplorerSession(settings)
        self.session.auto_refresh = auto_refresh
        # Root is set up front; the browser screen performs the first scan
        self.session.navigator.set_root(root)

    def on_mount(self) -> None:
        """Called when the app is mounted."""
        self.push_screen(BrowserScreen())

    def action_help(self) -> None:
        """Show help information."""
        self.notify(
            "Enter opens a directory, Backspace goes up, / searches, x deletes, "
            "s sorts, a shows all sizes, h shows hidden, r rescans",
            title="Help",
            timeout=6,
        )


def run_tui(
    root: Path,
    settings: Optional[Settings] = None,
    auto_refresh: bool = False,
    dry_run: bool = False,
) -> None:
    """Run the interactive browser.

    Args:
        root: Directory the session may not climb above
        settings: Session settings (defaults if omitted)
        auto_refresh: Start with periodic rescans enabled
        dry_run: If True, don't actually delete files
    """
    app = DiskscopeApp(root, settings=settings, auto_refresh=auto_refresh, dry_run=dry_run)
    app.run()
