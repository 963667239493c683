"""Tests for sorting and search."""

from diskscope.models import FileEntry, FilterConfig
from diskscope.sorting import apply_view, search_entries, sort_entries


def _file(name, size):
    return FileEntry(path=f"/d/{name}", name=name, size=size)


def _dir(name, size):
    return FileEntry(path=f"/d/{name}", name=name, size=size, is_directory=True)


class TestSortEntries:
    def test_directories_first_by_size(self):
        entries = [_file("huge.iso", 9000), _dir("small", 10), _dir("big", 500), _file("tiny", 1)]

        result = sort_entries(entries, by_size=True)

        assert [e.name for e in result] == ["big", "small", "huge.iso", "tiny"]

    def test_directories_first_by_name(self):
        entries = [_file("alpha", 1), _dir("zeta", 1), _dir("Beta", 1), _file("Gamma", 1)]

        result = sort_entries(entries, by_size=False)

        assert [e.name for e in result] == ["Beta", "zeta", "alpha", "Gamma"]

    def test_name_order_ignores_case(self):
        entries = [_file("b", 1), _file("C", 1), _file("a", 1)]
        assert [e.name for e in sort_entries(entries, by_size=False)] == ["a", "b", "C"]

    def test_stable_for_equal_sizes(self):
        entries = [_file("first", 5), _file("second", 5), _file("third", 5)]
        assert [e.name for e in sort_entries(entries, by_size=True)] == ["first", "second", "third"]

    def test_stable_for_names_equal_ignoring_case(self):
        entries = [_file("readme", 1), _file("README", 2)]
        assert [e.size for e in sort_entries(entries, by_size=False)] == [1, 2]

    def test_does_not_mutate_input(self):
        entries = [_file("a", 1), _dir("b", 2)]
        sort_entries(entries)
        assert [e.name for e in entries] == ["a", "b"]


class TestSearchEntries:
    def test_empty_query_returns_everything(self):
        entries = [_file("a", 1), _file("b", 2)]
        assert search_entries(entries, "") == entries

    def test_case_insensitive_substring(self):
        entries = [_file("Photos2024", 1), _file("report.PDF", 2), _file("notes", 3)]

        assert [e.name for e in search_entries(entries, "PHOTO")] == ["Photos2024"]
        assert [e.name for e in search_entries(entries, "pdf")] == ["report.PDF"]

    def test_keeps_order(self):
        entries = [_file("xa", 3), _file("b", 2), _file("ya", 1)]
        assert [e.name for e in search_entries(entries, "a")] == ["xa", "ya"]

    def test_no_match(self):
        assert search_entries([_file("a", 1)], "zzz") == []


class TestApplyView:
    def test_sorts_then_searches(self):
        entries = [_file("log-small", 1), _dir("logs", 5), _file("log-big", 10), _file("other", 99)]
        filters = FilterConfig(search_query="LOG")

        result = apply_view(entries, filters)

        assert [e.name for e in result] == ["logs", "log-big", "log-small"]
