"""Data models for diskscope."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# Entries smaller than this are hidden unless "show all" is on
DEFAULT_MIN_SIZE_BYTES = 100 * 1024


def format_size(size_bytes: int) -> str:
    """Format bytes to a human-readable string (binary units)."""
    if size_bytes >= 1024**4:
        return f"{size_bytes / (1024**4):.1f} TiB"
    elif size_bytes >= 1024**3:
        return f"{size_bytes / (1024**3):.1f} GiB"
    elif size_bytes >= 1024**2:
        return f"{size_bytes / (1024**2):.1f} MiB"
    elif size_bytes >= 1024:
        return f"{size_bytes / 1024:.1f} KiB"
    else:
        return f"{size_bytes} B"


class FileEntry(BaseModel):
    """One child of a scanned directory."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Absolute path of the entry")
    name: str = Field(..., description="Final path component")
    size: int = Field(..., ge=0, description="Size in bytes (aggregate for directories)")
    is_directory: bool = Field(False, description="Whether the entry is a directory")

    @property
    def size_human(self) -> str:
        """Human-readable size string."""
        return format_size(self.size)

    @property
    def is_hidden(self) -> bool:
        """Dot-prefixed names are hidden."""
        return self.name.startswith(".")


class FilterConfig(BaseModel):
    """Filter, search and sort settings for a browsing session."""

    # Applied at scan time
    min_size_bytes: int = Field(
        default=DEFAULT_MIN_SIZE_BYTES,
        ge=0,
        description="Entries below this size are dropped unless show_all is set",
    )
    show_all: bool = Field(default=False, description="Ignore the minimum size threshold")
    show_hidden: bool = Field(default=False, description="Include dot-prefixed entries")

    # Applied at display time
    search_query: str = Field(default="", description="Case-insensitive name substring")
    sort_by_size: bool = Field(
        default=True,
        description="Order by descending size instead of by name",
    )

    def scan_key(self) -> tuple[int, bool, bool]:
        """The part of the config that changes what a scan returns."""
        return (self.min_size_bytes, self.show_all, self.show_hidden)


class CacheEntry(BaseModel):
    """A cached directory scan."""

    model_config = ConfigDict(frozen=True)

    entries: tuple[FileEntry, ...] = Field(default_factory=tuple)
    total_size: int = Field(0, ge=0, description="Sum of entry sizes")
    computed_at: float = Field(..., description="Clock reading when the scan completed")
    filters: Optional[FilterConfig] = Field(
        None, description="Scan-time filters that produced the entries"
    )


class ScanOutcome(BaseModel):
    """Result of scanning one directory."""

    path: str = Field(..., description="Directory that was scanned")
    entries: list[FileEntry] = Field(default_factory=list)
    total_size: int = Field(0, ge=0, description="Sum of retained entry sizes")
    from_cache: bool = Field(False, description="Whether the result came from the scan cache")
    skipped: int = Field(0, ge=0, description="Children that could not be read")
    truncated: int = Field(
        0, ge=0, description="Directories below the depth limit that were not counted"
    )
    error: Optional[str] = Field(None, description="Listing error, if the directory was unreadable")
    filters_mismatch: bool = Field(
        False,
        description="Cached result was produced under different scan-time filters",
    )

    @property
    def size_human(self) -> str:
        """Human-readable total size."""
        return format_size(self.total_size)


class DeleteResult(BaseModel):
    """Result of deleting a file or directory."""

    path: str = Field(..., description="Path that was deleted")
    is_directory: bool = Field(False, description="Whether a directory tree was removed")
    success: bool = Field(True, description="Whether deletion succeeded")
    bytes_freed: int = Field(0, ge=0, description="Size of the removed entry")
    error: Optional[str] = Field(None, description="Error message if failed")


class DirectoryStats(BaseModel):
    """Summary counts over the current entry list."""

    total_items: int = 0
    total_size: int = 0
    file_count: int = 0
    dir_count: int = 0

    @property
    def size_human(self) -> str:
        """Human-readable total size."""
        return format_size(self.total_size)
