"""Tests for the path enumerator."""

import pytest

from yarn_why.graph import DescriptorGraphBuilder, PathEnumerator, splice_cycles
from yarn_why.models import Descriptor, Entry


# ── Helpers ───────────────────────────────────────────────────

def _make_entry(name, version, ranges, deps=()):
    return Entry(
        name=name,
        version=version,
        descriptors=tuple(Descriptor(name, r) for r in ranges),
        dependencies=tuple(Descriptor(n, r) for n, r in deps),
    )


def _d(name, range_="^1"):
    return Descriptor(name, range_)


def _paths(entries, queries, visit_cap=20):
    graph = DescriptorGraphBuilder().build(entries)
    return sorted(PathEnumerator(graph, visit_cap=visit_cap).find_paths(queries))


def _names(paths):
    return [[d.name for d in p] for p in paths]


# ── Cycle splicing ────────────────────────────────────────────

class TestSpliceCycles:
    def test_no_cycle(self):
        assert splice_cycles([1, 2, 3]) == (1, 2, 3)

    def test_query_revisited_truncates_at_leftmost(self):
        assert splice_cycles([0, 1, 9, 2, 9]) == (0, 1, 9)

    def test_inner_loop_removed(self):
        assert splice_cycles([0, 1, 2, 1, 9]) == (0, 1, 9)


# ── Enumeration ───────────────────────────────────────────────

class TestPathEnumerator:
    def test_chain(self):
        entries = [
            _make_entry("app", "1.0.0", ["^1"], [("mid", "^1")]),
            _make_entry("mid", "1.0.0", ["^1"], [("leaf", "^1")]),
            _make_entry("leaf", "1.0.0", ["^1"]),
        ]
        assert _names(_paths(entries, [_d("leaf")])) == [["app", "mid", "leaf"]]

    def test_diamond_yields_both_paths(self):
        entries = [
            _make_entry("app", "1.0.0", ["^1"], [("left", "^1"), ("right", "^1")]),
            _make_entry("left", "1.0.0", ["^1"], [("shared", "^1")]),
            _make_entry("right", "1.0.0", ["^1"], [("shared", "^1")]),
            _make_entry("shared", "1.0.0", ["^1"]),
        ]
        assert _names(_paths(entries, [_d("shared")])) == [
            ["app", "left", "shared"],
            ["app", "right", "shared"],
        ]

    def test_root_query_single_node_path(self):
        entries = [_make_entry("solo", "1.0.0", ["^1"])]
        assert _paths(entries, [_d("solo")]) == [(_d("solo"),)]

    def test_absent_query_is_empty(self):
        entries = [_make_entry("solo", "1.0.0", ["^1"])]
        assert _paths(entries, [_d("ghost")]) == []

    def test_fallback_uses_first_query_only(self):
        entries = [_make_entry("solo", "1.0.0", ["^1", "^2"])]
        assert _paths(entries, [_d("solo", "^1"), _d("solo", "^2")]) == [(_d("solo", "^1"),)]

    def test_multiple_queries_all_reported(self):
        entries = [
            _make_entry("a", "1.0.0", ["^1"], [("lib", "^1")]),
            _make_entry("b", "1.0.0", ["^1"], [("lib", "^2")]),
            _make_entry("lib", "2.0.0", ["^1", "^2"]),
        ]
        paths = _paths(entries, [_d("lib", "^1"), _d("lib", "^2")])
        assert paths == [
            (_d("a"), _d("lib", "^1")),
            (_d("b"), _d("lib", "^2")),
        ]

    def test_cycle_terminates_without_duplicates(self):
        entries = [
            _make_entry("root", "1.0.0", ["^1"], [("a", "^1")]),
            _make_entry("a", "1.0.0", ["^1"], [("b", "^1")]),
            _make_entry("b", "1.0.0", ["^1"], [("q", "^1")]),
            _make_entry("q", "1.0.0", ["^1"], [("b", "^1")]),
        ]
        paths = _paths(entries, [_d("q")])
        assert _names(paths) == [["root", "a", "b", "q"]]
        for path in paths:
            assert len(set(path)) == len(path)

    def test_pure_cycle_falls_back_to_single_node(self):
        entries = [
            _make_entry("a", "1.0.0", ["^1"], [("b", "^1")]),
            _make_entry("b", "1.0.0", ["^1"], [("a", "^1")]),
        ]
        assert _paths(entries, [_d("a")]) == [(_d("a"),)]

    def test_visit_cap_drops_branches_silently(self):
        entries = [
            _make_entry("root", "1.0.0", ["^1"], [("left", "^1"), ("right", "^1")]),
            _make_entry("left", "1.0.0", ["^1"], [("q", "^1")]),
            _make_entry("right", "1.0.0", ["^1"], [("q", "^1")]),
            _make_entry("q", "1.0.0", ["^1"]),
        ]
        assert len(_paths(entries, [_d("q")])) == 2
        assert _names(_paths(entries, [_d("q")], visit_cap=1)) == [["root", "left", "q"]]

    def test_invalid_visit_cap(self):
        graph = DescriptorGraphBuilder().build([])
        with pytest.raises(ValueError):
            PathEnumerator(graph, visit_cap=0)
