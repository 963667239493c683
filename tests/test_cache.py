"""Tests for the scan cache."""

from diskscope.cache import CACHE_TTL, ScanCache
from diskscope.models import FileEntry, FilterConfig


def _entries():
    return [
        FileEntry(path="/data/photos", name="photos", size=500, is_directory=True),
        FileEntry(path="/data/readme.txt", name="readme.txt", size=50),
    ]


class TestLookup:
    def test_miss_when_empty(self):
        assert ScanCache().lookup("/data") is None

    def test_hit_within_ttl(self, clock):
        cache = ScanCache(clock=clock)
        cache.store("/data", _entries(), 550)

        clock.advance(CACHE_TTL - 1)
        hit = cache.lookup("/data")
        assert hit is not None
        assert list(hit.entries) == _entries()
        assert hit.total_size == 550

    def test_miss_once_ttl_reached(self, clock):
        cache = ScanCache(clock=clock)
        cache.store("/data", _entries(), 550)

        clock.advance(CACHE_TTL)
        assert cache.lookup("/data") is None

    def test_stale_entry_is_not_purged(self, clock):
        cache = ScanCache(clock=clock)
        cache.store("/data", _entries(), 550)

        clock.advance(CACHE_TTL + 10)
        assert cache.lookup("/data") is None
        assert "/data" in cache
        assert len(cache) == 1

    def test_custom_ttl(self, clock):
        cache = ScanCache(ttl=5, clock=clock)
        cache.store("/data", [], 0)
        clock.advance(6)
        assert cache.lookup("/data") is None


class TestStore:
    def test_replaces_existing_entry(self, clock):
        cache = ScanCache(clock=clock)
        cache.store("/data", _entries(), 550)

        clock.advance(CACHE_TTL + 1)
        cache.store("/data", _entries()[:1], 500)

        hit = cache.lookup("/data")
        assert hit is not None
        assert hit.total_size == 500
        assert len(hit.entries) == 1
        assert len(cache) == 1

    def test_records_filters(self):
        cache = ScanCache()
        filters = FilterConfig(show_all=True)
        cache.store("/data", [], 0, filters)

        filters.show_all = False
        # The cache keeps its own copy
        assert cache.lookup("/data").filters.show_all is True


class TestInvalidate:
    def test_removes_entry(self):
        cache = ScanCache()
        cache.store("/data", _entries(), 550)
        cache.invalidate("/data")
        assert cache.lookup("/data") is None
        assert "/data" not in cache

    def test_missing_path_is_ignored(self):
        cache = ScanCache()
        cache.invalidate("/nowhere")
        assert len(cache) == 0

    def test_invalidate_subtree(self):
        cache = ScanCache()
        for path in ("/data", "/data/photos", "/data/photos/2024", "/data/photos-old"):
            cache.store(path, [], 0)

        removed = cache.invalidate_subtree("/data/photos")

        assert removed == 2
        assert "/data" in cache
        assert "/data/photos-old" in cache
        assert "/data/photos" not in cache

    def test_clear(self):
        cache = ScanCache()
        cache.store("/a", [], 0)
        cache.store("/b", [], 0)
        cache.clear()
        assert len(cache) == 0
