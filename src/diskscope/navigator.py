"""Root-bounded directory navigation."""

import logging
import os
from typing import Optional

logger = logging.getLogger(__name__)


def is_within(path: str, root: str) -> bool:
    """True if path is root or a descendant of root (by path components)."""
    try:
        return os.path.commonpath([path, root]) == root
    except ValueError:
        # Different drives, or mixing absolute and relative paths
        return False


class Navigator:
    """
    Tracks the current directory and the root it may not climb above.

    Before set_root is called both root and current are None.
    """

    def __init__(self) -> None:
        self.root: Optional[str] = None
        self.current: Optional[str] = None

    @property
    def has_root(self) -> bool:
        return self.root is not None

    def set_root(self, path: str | os.PathLike) -> str:
        """Make path both the root and the current directory."""
        root = os.path.abspath(os.fspath(path))
        self.root = root
        self.current = root
        logger.debug("Root set to %s", root)
        return root

    def navigate_to(self, path: str | os.PathLike) -> str:
        """
        Move to path.

        Callers pass children of the current directory or ancestors taken
        from breadcrumbs, so no boundary check is made here.
        """
        self.current = os.path.abspath(os.fspath(path))
        return self.current

    def parent(self) -> Optional[str]:
        """Parent of the current directory, or None at a filesystem root."""
        if self.current is None:
            return None
        parent = os.path.dirname(self.current)
        if parent == self.current:
            return None
        return parent

    def is_within_root(self, path: str | os.PathLike) -> bool:
        """True if path is the root or below it."""
        if self.root is None:
            return False
        return is_within(os.path.abspath(os.fspath(path)), self.root)

    def can_go_up(self) -> bool:
        parent = self.parent()
        return parent is not None and self.is_within_root(parent)

    def go_up(self) -> bool:
        """
        Move to the parent directory if it stays inside the root.

        Returns:
            True if current changed, False if the move was refused
        """
        if not self.can_go_up():
            return False
        self.current = self.parent()
        return True

    def breadcrumbs(self) -> list[tuple[str, str]]:
        """(name, path) pairs from the root down to the current directory."""
        if self.root is None or self.current is None:
            return []
        if not is_within(self.current, self.root):
            return [(os.path.basename(self.current) or self.current, self.current)]

        crumbs = [(os.path.basename(self.root) or self.root, self.root)]
        relative = os.path.relpath(self.current, self.root)
        if relative == os.curdir:
            return crumbs

        path = self.root
        for part in relative.split(os.sep):
            path = os.path.join(path, part)
            crumbs.append((part, path))
        return crumbs
