"""Directory scanning for diskscope."""

import logging
import os
import stat
from typing import Optional

from diskscope.cache import ScanCache
from diskscope.models import FileEntry, FilterConfig, ScanOutcome
from diskscope.sizing import DEFAULT_MAX_DEPTH, measure
from diskscope.sorting import sort_entries

logger = logging.getLogger(__name__)


class DirectoryScanner:
    """
    Lists a directory, sizes each child and caches the result.

    A cache hit is returned as-is, even if it was produced under different
    scan-time filters; ``ScanOutcome.filters_mismatch`` tells the caller when
    that happened. Pass ``refresh=True`` to force a fresh listing.
    """

    def __init__(self, cache: Optional[ScanCache] = None, max_depth: int = DEFAULT_MAX_DEPTH):
        self.cache = cache if cache is not None else ScanCache()
        self.max_depth = max_depth

    def scan(
        self,
        path: str | os.PathLike,
        filters: Optional[FilterConfig] = None,
        refresh: bool = False,
    ) -> ScanOutcome:
        """
        Scan one directory.

        Args:
            path: Directory to scan
            filters: Hidden/size filters and sort order (defaults if omitted)
            refresh: Skip the cache lookup

        Returns:
            ScanOutcome with retained entries, sorted, and their total size
        """
        if filters is None:
            filters = FilterConfig()
        key = os.path.abspath(os.fspath(path))

        if not refresh:
            cached = self.cache.lookup(key)
            if cached is not None:
                mismatch = (
                    cached.filters is not None and cached.filters.scan_key() != filters.scan_key()
                )
                if mismatch:
                    logger.info("Cached scan of %s was made with different filters", key)
                return ScanOutcome(
                    path=key,
                    entries=list(cached.entries),
                    total_size=cached.total_size,
                    from_cache=True,
                    filters_mismatch=mismatch,
                )

        entries: list[FileEntry] = []
        skipped = 0
        truncated = 0

        try:
            with os.scandir(key) as children:
                for child in children:
                    if not filters.show_hidden and child.name.startswith("."):
                        continue

                    try:
                        st = child.stat(follow_symlinks=False)
                    except OSError as e:
                        logger.debug("Skipping %s: %s", child.path, e)
                        skipped += 1
                        continue

                    is_dir = stat.S_ISDIR(st.st_mode)
                    if is_dir:
                        report = measure(child.path, self.max_depth)
                        size = report.size
                        skipped += report.skipped
                        truncated += report.truncated
                    else:
                        size = st.st_size

                    if not filters.show_all and size < filters.min_size_bytes:
                        continue

                    entries.append(
                        FileEntry(path=child.path, name=child.name, size=size, is_directory=is_dir)
                    )
        except OSError as e:
            logger.warning("Cannot list %s: %s", key, e)
            return ScanOutcome(path=key, error=str(e))

        entries = sort_entries(entries, filters.sort_by_size)
        total_size = sum(e.size for e in entries)

        self.cache.store(key, entries, total_size, filters)
        logger.debug(
            "Scanned %s: %d entries, %d bytes, %d skipped, %d truncated",
            key,
            len(entries),
            total_size,
            skipped,
            truncated,
        )

        return ScanOutcome(
            path=key,
            entries=entries,
            total_size=total_size,
            skipped=skipped,
            truncated=truncated,
        )
