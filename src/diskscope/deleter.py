"""File and directory removal for diskscope."""

import logging
import os
import shutil
import stat

from diskscope.models import DeleteResult, FileEntry
from diskscope.sizing import aggregate_size

logger = logging.getLogger(__name__)


def is_protected_path(path: str | os.PathLike) -> bool:
    """
    Check if a path must never be deleted outright.

    Filesystem roots and the user's home directory are protected.
    """
    full_path = os.path.abspath(os.fspath(path))
    if os.path.dirname(full_path) == full_path:
        return True
    return full_path == os.path.abspath(os.path.expanduser("~"))


def entry_for_path(path: str | os.PathLike) -> FileEntry:
    """
    Build a FileEntry for an arbitrary path.

    Raises:
        FileNotFoundError: if the path does not exist
    """
    full_path = os.path.abspath(os.fspath(path))
    st = os.lstat(full_path)
    is_dir = stat.S_ISDIR(st.st_mode)
    return FileEntry(
        path=full_path,
        name=os.path.basename(full_path) or full_path,
        size=aggregate_size(full_path) if is_dir else st.st_size,
        is_directory=is_dir,
    )


def delete_entry(entry: FileEntry, dry_run: bool = False) -> DeleteResult:
    """
    Delete a file, or a directory and everything under it.

    Args:
        entry: Entry to delete
        dry_run: If True, don't actually delete

    Returns:
        DeleteResult; on failure ``error`` says whether the directory or the
        file removal failed and nothing else has been touched
    """
    if dry_run:
        return DeleteResult(
            path=entry.path,
            is_directory=entry.is_directory,
            bytes_freed=entry.size,
        )

    if entry.is_directory:
        try:
            shutil.rmtree(entry.path)
        except OSError as e:
            logger.error("Error deleting directory %s: %s", entry.path, e)
            return DeleteResult(
                path=entry.path,
                is_directory=True,
                success=False,
                error=f"Error deleting directory: {e}",
            )
    else:
        try:
            os.remove(entry.path)
        except OSError as e:
            logger.error("Error deleting file %s: %s", entry.path, e)
            return DeleteResult(
                path=entry.path,
                is_directory=False,
                success=False,
                error=f"Error deleting file: {e}",
            )

    logger.info("Deleted %s (%d bytes)", entry.path, entry.size)
    return DeleteResult(path=entry.path, is_directory=entry.is_directory, bytes_freed=entry.size)
