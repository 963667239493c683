"""Recursive directory size aggregation for diskscope."""

import logging
import os
import stat
from typing import NamedTuple

logger = logging.getLogger(__name__)

# Deep enough for real trees, well below the interpreter recursion limit
DEFAULT_MAX_DEPTH = 256


class SizeReport(NamedTuple):
    """Totals gathered while walking a directory tree."""

    size: int
    files: int
    dirs: int
    skipped: int
    truncated: int = 0


def _dir_key(st: os.stat_result) -> tuple[int, int] | None:
    # Some platforms report st_ino as 0 from DirEntry.stat(); those can't be tracked
    if not st.st_ino:
        return None
    return st.st_dev, st.st_ino


def measure(path: str | os.PathLike, max_depth: int = DEFAULT_MAX_DEPTH) -> SizeReport:
    """
    Walk a directory tree with os.scandir and total up file sizes.

    Symbolic links are never followed; a link counts as a file of its own
    length. Directories already visited (same device and inode) are skipped,
    so bind mounts and hard-linked directories cannot loop.

    Args:
        path: Directory to measure
        max_depth: Maximum recursion depth below ``path``

    Returns:
        SizeReport of (total_bytes, file_count, dir_count, skipped, truncated).
        ``skipped`` counts children whose metadata or listing could not be
        read, ``truncated`` the directories left unwalked at ``max_depth``.
    """
    total_size = 0
    file_count = 0
    dir_count = 0
    skipped = 0
    truncated = 0
    seen: set[tuple[int, int]] = set()

    try:
        root_key = _dir_key(os.stat(path))
    except OSError:
        root_key = None
    if root_key:
        seen.add(root_key)

    def _scan(p: str, depth: int) -> bool:
        nonlocal total_size, file_count, dir_count, skipped, truncated
        if depth > max_depth:
            logger.debug("Depth limit reached at %s", p)
            truncated += 1
            return True
        try:
            with os.scandir(p) as entries:
                for entry in entries:
                    try:
                        st = entry.stat(follow_symlinks=False)
                        if stat.S_ISDIR(st.st_mode):
                            key = _dir_key(st)
                            if key is not None:
                                if key in seen:
                                    continue
                                seen.add(key)
                            dir_count += 1
                            if not _scan(entry.path, depth + 1):
                                skipped += 1
                        else:
                            total_size += st.st_size
                            file_count += 1
                    except OSError as e:
                        logger.debug("Skipping %s: %s", entry.path, e)
                        skipped += 1
                        continue
        except OSError as e:
            logger.debug("Cannot list %s: %s", p, e)
            return False
        return True

    if not _scan(os.fspath(path), 0):
        skipped += 1
    return SizeReport(total_size, file_count, dir_count, skipped, truncated)


def aggregate_size(path: str | os.PathLike, max_depth: int = DEFAULT_MAX_DEPTH) -> int:
    """
    Total byte size of a path.

    A file reports its own length, a directory the recursive sum of its
    contents. Anything that cannot be read counts as 0.
    """
    try:
        st = os.lstat(path)
    except OSError:
        return 0
    if stat.S_ISDIR(st.st_mode):
        return measure(path, max_depth).size
    return st.st_size
