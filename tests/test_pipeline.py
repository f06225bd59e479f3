"""Tests for the full query pipeline."""

import io
import json
from pathlib import Path

import pytest

from yarn_why.exceptions import ArgumentError, InputError
from yarn_why.formatter import format_forest
from yarn_why.models import Descriptor, Entry, OutputFormat, QueryConfig
from yarn_why.pipeline import load_entries, run_query, truncate_paths

FIXTURES = Path(__file__).parent / "fixtures"


def _run(fixture, query, **kwargs):
    entries = load_entries(FIXTURES / fixture)
    return run_query(entries, QueryConfig(query=query, **kwargs))


class TestLoadEntries:
    def test_from_path(self):
        assert len(load_entries(FIXTURES / "classic.lock")) == 9

    def test_from_stream(self):
        stream = io.BytesIO((FIXTURES / "berry.lock").read_bytes())
        assert len(load_entries(None, stream)) == 6

    def test_binary_stream(self):
        with pytest.raises(InputError):
            load_entries(None, io.BytesIO(b"\xff\xfe\xfd"))

    def test_nothing_given(self):
        with pytest.raises(ArgumentError):
            load_entries()


class TestTruncatePaths:
    def test_keeps_query_end(self):
        path = tuple(Descriptor(n, "^1") for n in "abcde")
        assert truncate_paths([path], 2) == [path[-2:]]

    def test_no_limit(self):
        path = tuple(Descriptor(n, "^1") for n in "abcde")
        assert truncate_paths([path], None) == [path]

    def test_merges_identical_tails(self):
        p1 = tuple(Descriptor(n, "^1") for n in "axq")
        p2 = tuple(Descriptor(n, "^1") for n in "bxq")
        assert truncate_paths([p1, p2], 2) == [p1[-2:]]


class TestRunQuery:
    def test_workspace_root_single_line(self):
        result = _run("single_root.lock", "foolib")
        assert len(result.paths) == 1
        assert format_forest(result.forest) == "└─ foolib@2.0.0 (via 1.2.3 || ^2.0.0)"

    def test_workspace_root_with_explicit_range(self):
        result = _run("single_root.lock", "foolib@1.2.3 || ^2.0.0")
        assert format_forest(result.forest) == "└─ foolib@2.0.0 (via 1.2.3 || ^2.0.0)"

    def test_diamond_keeps_queried_leaf_under_both_branches(self):
        result = _run("berry.lock", "node-gyp")
        assert result.found
        assert format_forest(result.forest).splitlines() == [
            "└─ root-workspace-0b6124@0.0.0-use.local (via .)",
            "   └─ vite@5.2.4 (via ^5.2.4)",
            "      ├─ fsevents@2.3.3 (via ~2.3.3)",
            "      │  └─ node-gyp@10.0.1 (via latest)",
            "      └─ rollup@4.13.0 (via ^4.13.0)",
            "         └─ fsevents@2.3.3 (via ~2.3.2)",
            "            └─ node-gyp@10.0.1 (via latest)",
        ]

    def test_patch_entries_do_not_double_paths(self):
        result = _run("berry.lock", "node-gyp")
        assert len(result.paths) == 2

    def test_not_found(self):
        result = _run("classic.lock", "left-pad")
        assert not result.found
        assert result.paths == []
        assert "not found" in result.message

    def test_explicit_range_not_in_lockfile(self):
        result = _run("classic.lock", "lodash@^2.0.0")
        assert not result.found

    def test_bare_name_reports_every_range(self):
        result = _run("classic.lock", "lodash")
        leaves = {p[-1] for p in result.paths}
        assert leaves == {
            Descriptor("lodash", "^3.10.0"),
            Descriptor("lodash", "^4.17.0"),
            Descriptor("lodash", "^4.17.21"),
        }
        assert [r.descriptor.name for r in result.forest] == ["legacy-lib", "modern-lib", "report-tool"]

    def test_scoped_package(self):
        result = _run("classic.lock", "js-tokens")
        assert [[d.name for d in p] for p in result.paths] == [
            ["modern-lib", "@babel/code-frame", "@babel/highlight", "js-tokens"],
            ["report-tool", "@babel/code-frame", "@babel/highlight", "js-tokens"],
        ]

    def test_alias_dependency_resolves(self):
        result = _run("classic.lock", "strip-ansi-cjs")
        assert result.paths == [(
            Descriptor("report-tool", "^0.3.0"),
            Descriptor("strip-ansi-cjs", "strip-ansi@^6.0.1"),
        )]

    def test_version_filter(self):
        result = _run("classic.lock", "lodash", version_filter="^4.0.0")
        assert [r.descriptor.name for r in result.forest] == ["modern-lib", "report-tool"]

    def test_version_filter_excludes_everything(self):
        result = _run("classic.lock", "lodash", version_filter=">=5.0.0")
        assert not result.found
        assert "no version matching" in result.message

    def test_version_filter_excludes_explicit_range(self):
        result = _run("classic.lock", "lodash@^3.10.0", version_filter="^4.0.0")
        assert not result.found
        assert result.paths == []
        assert "no version matching" in result.message

    def test_version_filter_keeps_matching_explicit_range(self):
        result = _run("classic.lock", "lodash@npm:^4.17.0", version_filter="^4.0.0")
        assert result.found
        assert result.paths[0][-1] == Descriptor("lodash", "^4.17.0")
        assert result.forest[0].children[0].version == "4.17.21"

    def test_dangling_dependency_has_no_version(self):
        entries = [Entry(
            name="app",
            version="1.0.0",
            descriptors=(Descriptor("app", "^1.0.0"),),
            dependencies=(Descriptor("ghost", "^9.0.0"),),
        )]
        result = run_query(entries, QueryConfig(query="ghost@^9.0.0"))
        leaf = json.loads(format_forest(result.forest, OutputFormat.JSON))[0]["children"][0]
        assert leaf == {"descriptor": "ghost@^9.0.0", "version": None}

    def test_invalid_filter(self):
        with pytest.raises(ArgumentError):
            _run("classic.lock", "lodash", version_filter="??")

    def test_max_depth(self):
        result = _run("berry.lock", "node-gyp", max_depth=2)
        assert all(len(p) <= 2 for p in result.paths)
        assert all(p[-1].name == "node-gyp" for p in result.paths)

    def test_invalid_max_depth(self):
        with pytest.raises(ArgumentError):
            _run("berry.lock", "node-gyp", max_depth=0)

    def test_no_dedup_matches_raw_tree(self):
        raw = _run("classic.lock", "lodash", dedup=False)
        deduped = _run("classic.lock", "lodash")
        assert format_forest(raw.forest) == format_forest(deduped.forest)

    def test_deterministic(self):
        first = format_forest(_run("classic.lock", "lodash").forest)
        second = format_forest(_run("classic.lock", "lodash").forest)
        assert first == second
