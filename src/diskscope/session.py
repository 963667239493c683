"""Browsing session: the model behind every diskscope front end.

The session owns the navigator, the scan cache and the current entry list.
Front ends push commands in (navigate, filter, delete) and read state out
(visible entries, total size, scanning flag); they never scan on their own.
"""

import logging
import os
import threading
import time
from typing import Callable, Optional

from diskscope.cache import ScanCache
from diskscope.config import Settings
from diskscope.deleter import delete_entry
from diskscope.errors import NoRootError
from diskscope.models import DeleteResult, DirectoryStats, FileEntry, ScanOutcome
from diskscope.navigator import Navigator, is_within
from diskscope.scanner import DirectoryScanner
from diskscope.sorting import apply_view

logger = logging.getLogger(__name__)


class ExplorerSession:
    """State and commands for browsing one root directory."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        cache: Optional[ScanCache] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.settings = settings or Settings()
        self.filters = self.settings.filter_config()
        self.cache = cache if cache is not None else ScanCache(self.settings.cache_ttl, clock)
        self.scanner = DirectoryScanner(self.cache, max_depth=self.settings.max_depth)
        self.navigator = Navigator()

        self.entries: list[FileEntry] = []
        self.total_size = 0
        self.scanning = False
        self.last_outcome: Optional[ScanOutcome] = None

        self.auto_refresh = False
        self.auto_refresh_interval = self.settings.auto_refresh_interval
        self._clock = clock
        self.last_refresh = clock()

        # Scans may run on a worker thread; one at a time per session
        self._lock = threading.RLock()

    @property
    def root(self) -> Optional[str]:
        return self.navigator.root

    @property
    def current(self) -> Optional[str]:
        return self.navigator.current

    @property
    def visible_entries(self) -> list[FileEntry]:
        """Entries after sort order and search query are applied."""
        return apply_view(self.entries, self.filters)

    # Navigation

    def set_root(self, path: str | os.PathLike) -> ScanOutcome:
        """Choose the root directory and scan it."""
        self.navigator.set_root(path)
        return self.refresh()

    def navigate_to(self, path: str | os.PathLike) -> ScanOutcome:
        """Enter a directory (a child, or an ancestor from the breadcrumbs)."""
        if not self.navigator.has_root:
            raise NoRootError("Choose a root directory first")
        self.navigator.navigate_to(path)
        return self.refresh()

    def jump_to_crumb(self, index: int) -> Optional[ScanOutcome]:
        """
        Enter the ancestor at position ``index`` of the breadcrumbs.

        Returns:
            The new ScanOutcome, or None if there is no such crumb or it is
            the current directory
        """
        crumbs = self.breadcrumbs()
        if not 0 <= index < len(crumbs):
            return None
        _, path = crumbs[index]
        if path == self.navigator.current:
            return None
        return self.navigate_to(path)

    def go_up(self) -> Optional[ScanOutcome]:
        """Move to the parent directory; None if that would leave the root."""
        if not self.navigator.go_up():
            return None
        return self.refresh()

    def refresh(self, force: bool = False) -> ScanOutcome:
        """
        Scan the current directory.

        Args:
            force: Bypass the scan cache

        Raises:
            NoRootError: if no root has been chosen
        """
        current = self.navigator.current
        if current is None:
            raise NoRootError("Choose a root directory first")

        with self._lock:
            self.scanning = True
            try:
                outcome = self.scanner.scan(current, self.filters, refresh=force)
            finally:
                self.scanning = False

            self.entries = list(outcome.entries)
            self.total_size = outcome.total_size
            self.last_outcome = outcome
            self.last_refresh = self._clock()

        return outcome

    # Filtering

    def set_search(self, query: str) -> list[FileEntry]:
        """Change the search query; never rescans."""
        self.filters = self.filters.model_copy(update={"search_query": query})
        return self.visible_entries

    def set_sort_by_size(self, by_size: bool) -> list[FileEntry]:
        """Switch between size and name ordering; never rescans."""
        self.filters = self.filters.model_copy(update={"sort_by_size": by_size})
        return self.visible_entries

    def apply_filters(
        self,
        min_size_bytes: Optional[int] = None,
        show_all: Optional[bool] = None,
        show_hidden: Optional[bool] = None,
    ) -> ScanOutcome:
        """
        Change scan-time filters and rescan the current directory.

        The cached scan for the current directory was made with the old
        filters, so it is dropped before rescanning.
        """
        update = {
            key: value
            for key, value in (
                ("min_size_bytes", min_size_bytes),
                ("show_all", show_all),
                ("show_hidden", show_hidden),
            )
            if value is not None
        }
        self.filters = self.filters.model_validate({**self.filters.model_dump(), **update})

        current = self.navigator.current
        if current is None:
            raise NoRootError("Choose a root directory first")
        self.cache.invalidate(current)
        return self.refresh(force=True)

    # Deletion

    def delete(self, entry: FileEntry, dry_run: bool = False) -> DeleteResult:
        """
        Delete an entry of the current listing.

        On success the cached scans that counted it are dropped and the entry
        leaves the in-memory list; the total is recomputed from what remains.
        On failure nothing changes.
        """
        result = delete_entry(entry, dry_run=dry_run)
        if not result.success or dry_run:
            return result

        with self._lock:
            self._invalidate_after_delete(entry)
            self.entries = [e for e in self.entries if e.path != entry.path]
            self.total_size = sum(e.size for e in self.entries)

        return result

    def _invalidate_after_delete(self, entry: FileEntry) -> None:
        if entry.is_directory:
            self.cache.invalidate_subtree(entry.path)

        if self.navigator.current is not None:
            self.cache.invalidate(self.navigator.current)

        # Every ancestor inside the root has a cached total that included the entry
        root = self.navigator.root
        parent = os.path.dirname(entry.path)
        while root is not None and is_within(parent, root):
            self.cache.invalidate(parent)
            if parent == root:
                break
            parent = os.path.dirname(parent)

    # Summary and timers

    def stats(self) -> DirectoryStats:
        """Counts over the current (unsearched) entry list."""
        dir_count = sum(1 for e in self.entries if e.is_directory)
        return DirectoryStats(
            total_items=len(self.entries),
            total_size=self.total_size,
            file_count=len(self.entries) - dir_count,
            dir_count=dir_count,
        )

    def breadcrumbs(self) -> list[tuple[str, str]]:
        return self.navigator.breadcrumbs()

    def tick(self, now: Optional[float] = None) -> Optional[ScanOutcome]:
        """
        Rescan if auto refresh is on and the interval has elapsed.

        Returns:
            The new ScanOutcome, or None if nothing was due
        """
        if not self.auto_refresh or self.navigator.current is None:
            return None
        now = self._clock() if now is None else now
        if now - self.last_refresh < self.auto_refresh_interval:
            return None
        logger.debug("Auto refresh of %s", self.navigator.current)
        return self.refresh(force=True)
