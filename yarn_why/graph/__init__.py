"""Descriptor graph: normalization, reverse adjacency, queries and paths."""

from __future__ import annotations

from yarn_why.graph.builder import DescriptorGraph, DescriptorGraphBuilder
from yarn_why.graph.normalize import normalize_entries, strip_protocol
from yarn_why.graph.paths import DEFAULT_VISIT_CAP, PathEnumerator, splice_cycles
from yarn_why.graph.query import QueryResolver, parse_query, parse_version_filter

__all__ = [
    "DEFAULT_VISIT_CAP",
    "DescriptorGraph",
    "DescriptorGraphBuilder",
    "PathEnumerator",
    "QueryResolver",
    "normalize_entries",
    "parse_query",
    "parse_version_filter",
    "splice_cycles",
    "strip_protocol",
]
