"""Tests for data models."""

import pytest
from pydantic import ValidationError

from diskscope.models import (
    DEFAULT_MIN_SIZE_BYTES,
    CacheEntry,
    DirectoryStats,
    FileEntry,
    FilterConfig,
    ScanOutcome,
    format_size,
)


class TestFormatSize:
    def test_bytes(self):
        assert format_size(50) == "50 B"

    def test_kibibytes(self):
        assert format_size(100 * 1024) == "100.0 KiB"

    def test_mebibytes(self):
        assert format_size(5 * 1024**2) == "5.0 MiB"

    def test_gibibytes(self):
        assert format_size(3 * 1024**3 // 2) == "1.5 GiB"

    def test_tebibytes(self):
        assert format_size(2 * 1024**4) == "2.0 TiB"


class TestFileEntry:
    def test_is_immutable(self):
        entry = FileEntry(path="/data/a.txt", name="a.txt", size=10)
        with pytest.raises(ValidationError):
            entry.size = 20

    def test_rejects_negative_size(self):
        with pytest.raises(ValidationError):
            FileEntry(path="/data/a.txt", name="a.txt", size=-1)

    def test_hidden(self):
        assert FileEntry(path="/d/.git", name=".git", size=0, is_directory=True).is_hidden
        assert not FileEntry(path="/d/git", name="git", size=0).is_hidden

    def test_size_human(self):
        entry = FileEntry(path="/d/big", name="big", size=2048)
        assert entry.size_human == "2.0 KiB"

    def test_equality_by_value(self):
        a = FileEntry(path="/d/a", name="a", size=1)
        b = FileEntry(path="/d/a", name="a", size=1)
        assert a == b


class TestFilterConfig:
    def test_defaults(self):
        config = FilterConfig()
        assert config.min_size_bytes == DEFAULT_MIN_SIZE_BYTES == 102400
        assert config.show_all is False
        assert config.show_hidden is False
        assert config.search_query == ""
        assert config.sort_by_size is True

    def test_scan_key_ignores_display_settings(self):
        a = FilterConfig(search_query="foo", sort_by_size=False)
        b = FilterConfig()
        assert a.scan_key() == b.scan_key()

    def test_scan_key_tracks_scan_settings(self):
        assert FilterConfig(show_all=True).scan_key() != FilterConfig().scan_key()


class TestCacheEntry:
    def test_holds_entries_as_tuple(self):
        entry = CacheEntry(
            entries=[FileEntry(path="/d/a", name="a", size=3)],
            total_size=3,
            computed_at=0.0,
        )
        assert isinstance(entry.entries, tuple)
        assert entry.filters is None


class TestScanOutcome:
    def test_defaults(self):
        outcome = ScanOutcome(path="/d")
        assert outcome.entries == []
        assert outcome.total_size == 0
        assert not outcome.from_cache
        assert outcome.skipped == 0
        assert outcome.error is None


class TestDirectoryStats:
    def test_size_human(self):
        assert DirectoryStats(total_size=1024).size_human == "1.0 KiB"
