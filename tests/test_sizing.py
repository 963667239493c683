"""Tests for recursive size aggregation."""

import os
from unittest.mock import patch

from diskscope.sizing import aggregate_size, measure


def _deny_listing(*locked):
    """os.scandir replacement that refuses to list the given directories."""
    real_scandir = os.scandir
    locked_paths = {str(p) for p in locked}

    def fake_scandir(path="."):
        if os.fspath(path) in locked_paths:
            raise PermissionError(13, "Permission denied", os.fspath(path))
        return real_scandir(path)

    return fake_scandir


class TestAggregateSize:
    def test_file_size(self, tmp_path, write_file):
        f = write_file(tmp_path / "file.bin", 1234)
        assert aggregate_size(f) == 1234

    def test_empty_directory(self, tmp_path):
        assert aggregate_size(tmp_path) == 0

    def test_missing_path(self, tmp_path):
        assert aggregate_size(tmp_path / "nope") == 0

    def test_nested_directories(self, tmp_path, write_file):
        write_file(tmp_path / "a.txt", 10)
        write_file(tmp_path / "sub" / "b.txt", 20)
        write_file(tmp_path / "sub" / "deeper" / "c.txt", 30)
        assert aggregate_size(tmp_path) == 60

    def test_equals_sum_of_children(self, tmp_path, write_file):
        write_file(tmp_path / "one" / "x", 7)
        write_file(tmp_path / "one" / "two" / "y", 11)
        write_file(tmp_path / "three" / "z", 13)
        write_file(tmp_path / "top", 17)

        children = [tmp_path / name for name in os.listdir(tmp_path)]
        assert aggregate_size(tmp_path) == sum(aggregate_size(c) for c in children)

    def test_unreadable_child_contributes_zero(self, tmp_path, write_file):
        write_file(tmp_path / "ok" / "a", 100)
        write_file(tmp_path / "locked" / "b", 500)

        with patch("os.scandir", side_effect=_deny_listing(tmp_path / "locked")):
            assert aggregate_size(tmp_path) == 100

    def test_unlistable_directory_is_zero(self, tmp_path, write_file):
        write_file(tmp_path / "a", 100)

        with patch("os.scandir", side_effect=_deny_listing(tmp_path)):
            assert aggregate_size(tmp_path) == 0


class TestMeasure:
    def test_counts_files_and_dirs(self, tmp_path, write_file):
        write_file(tmp_path / "a", 1)
        write_file(tmp_path / "sub" / "b", 2)
        write_file(tmp_path / "sub" / "c", 3)

        report = measure(tmp_path)
        assert report.size == 6
        assert report.files == 3
        assert report.dirs == 1
        assert report.skipped == 0
        assert report.truncated == 0

    def test_reports_skipped_children(self, tmp_path, write_file):
        write_file(tmp_path / "ok" / "a", 100)
        write_file(tmp_path / "locked" / "b", 500)

        with patch("os.scandir", side_effect=_deny_listing(tmp_path / "locked")):
            report = measure(tmp_path)

        assert report.size == 100
        assert report.skipped == 1

    def test_does_not_follow_symlink_cycles(self, tmp_path, write_file):
        write_file(tmp_path / "a", 100)
        link = tmp_path / "loop"
        os.symlink(tmp_path, link)

        report = measure(tmp_path)
        # The link counts as itself, its target is not walked again
        assert report.size == 100 + os.lstat(link).st_size

    def test_respects_max_depth(self, tmp_path, write_file):
        deep = tmp_path
        for i in range(10):
            deep = deep / f"level{i}"
        write_file(deep / "bottom", 42)
        write_file(tmp_path / "top", 8)

        shallow = measure(tmp_path, max_depth=3)
        assert shallow.size == 8
        assert shallow.truncated == 1
        assert shallow.skipped == 0

        full = measure(tmp_path, max_depth=20)
        assert full.size == 50
        assert full.truncated == 0
