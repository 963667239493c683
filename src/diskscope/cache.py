"""Time-bounded cache of directory scans."""

import logging
import threading
import time
from typing import Callable, Iterable, Optional

from diskscope.models import CacheEntry, FileEntry, FilterConfig
from diskscope.navigator import is_within

logger = logging.getLogger(__name__)

CACHE_TTL = 300  # 5 minutes


class ScanCache:
    """
    Maps a directory path to its most recent scan.

    Stale entries are not purged; lookup treats them as a miss and the next
    store overwrites them.
    """

    def __init__(self, ttl: float = CACHE_TTL, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def lookup(self, path: str) -> Optional[CacheEntry]:
        """Return the cached scan for path if it is younger than the TTL."""
        with self._lock:
            entry = self._entries.get(path)
        if entry is None:
            return None
        if self._clock() - entry.computed_at >= self.ttl:
            logger.debug("Cache entry for %s is stale", path)
            return None
        return entry

    def store(
        self,
        path: str,
        entries: Iterable[FileEntry],
        total_size: int,
        filters: Optional[FilterConfig] = None,
    ) -> CacheEntry:
        """Replace whatever is cached for path."""
        entry = CacheEntry(
            entries=tuple(entries),
            total_size=total_size,
            computed_at=self._clock(),
            filters=filters.model_copy() if filters is not None else None,
        )
        with self._lock:
            self._entries[path] = entry
        return entry

    def invalidate(self, path: str) -> None:
        """Drop the cached scan for path, if any."""
        with self._lock:
            removed = self._entries.pop(path, None)
        if removed is not None:
            logger.debug("Invalidated cache entry for %s", path)

    def invalidate_subtree(self, path: str) -> int:
        """Drop the cached scans of path and everything below it."""
        with self._lock:
            doomed = [key for key in self._entries if is_within(key, path)]
            for key in doomed:
                del self._entries[key]
        return len(doomed)

    def clear(self) -> None:
        """Drop every cached scan."""
        with self._lock:
            self._entries.clear()

    def __contains__(self, path: object) -> bool:
        with self._lock:
            return path in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
