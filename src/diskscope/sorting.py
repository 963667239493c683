"""Sorting and search over scanned entries."""

from typing import Iterable

from diskscope.models import FileEntry, FilterConfig


def sort_entries(entries: Iterable[FileEntry], by_size: bool = True) -> list[FileEntry]:
    """
    Order entries with directories first.

    Within each group entries are ordered by descending size, or by
    case-insensitive name when ``by_size`` is False. The sort is stable, so
    ties keep their listing order.

    Args:
        entries: Entries to order
        by_size: Sort by size instead of by name

    Returns:
        New sorted list
    """
    if by_size:
        return sorted(entries, key=lambda e: (not e.is_directory, -e.size))
    return sorted(entries, key=lambda e: (not e.is_directory, e.name.lower()))


def search_entries(entries: list[FileEntry], query: str) -> list[FileEntry]:
    """
    Keep entries whose name contains query, ignoring case.

    An empty query returns the list unchanged.
    """
    if not query:
        return list(entries)
    needle = query.lower()
    return [e for e in entries if needle in e.name.lower()]


def apply_view(entries: Iterable[FileEntry], filters: FilterConfig) -> list[FileEntry]:
    """Sort then search, per the display-time part of filters."""
    return search_entries(sort_entries(entries, filters.sort_by_size), filters.search_query)
