"""Query pipeline: filter -> normalize -> graph -> resolve -> paths -> tree -> dedup."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO

from yarn_why.exceptions import ArgumentError
from yarn_why.graph import (
    DescriptorGraphBuilder,
    PathEnumerator,
    QueryResolver,
    normalize_entries,
    parse_version_filter,
)
from yarn_why.lockfile import decode_lockfile, parse_lockfile, read_lockfile
from yarn_why.models import Descriptor, Entry, QueryConfig, WhyResult
from yarn_why.tree import Deduplicator, TreeBuilder

logger = logging.getLogger(__name__)


def load_entries(path: Path | None = None, stream: BinaryIO | None = None) -> list[Entry]:
    """Read lockfile entries from ``path``, or from ``stream`` when no path is given."""
    if path is not None:
        return read_lockfile(path)
    if stream is None:
        raise ArgumentError("no lockfile given")
    return parse_lockfile(decode_lockfile(stream.read()))


def truncate_paths(
    paths: list[tuple[Descriptor, ...]],
    max_depth: int | None,
) -> list[tuple[Descriptor, ...]]:
    """Keep the last ``max_depth`` descriptors of each path, dropping duplicates."""
    if max_depth is None:
        return list(paths)
    unique: dict[tuple[Descriptor, ...], None] = {}
    for path in paths:
        unique.setdefault(path[-max_depth:], None)
    return list(unique)


def run_query(entries: list[Entry], config: QueryConfig) -> WhyResult:
    """Answer "why is this package here?" for one query."""
    resolver = QueryResolver.from_token(config.query)
    if config.max_depth is not None and config.max_depth < 1:
        raise ArgumentError("max depth must be at least 1")
    if config.visit_cap < 1:
        raise ArgumentError("visit cap must be at least 1")

    if config.version_filter:
        spec = parse_version_filter(config.version_filter)
        present = resolver.has_package(entries)
        pinned = resolver.range is not None and resolver.carries_range(entries)
        entries = resolver.apply_version_filter(entries, spec)
        if (present and not resolver.has_package(entries)) or (
            pinned and not resolver.carries_range(entries)
        ):
            return WhyResult(
                message=f"{resolver.name} has no version matching {config.version_filter}",
            )

    normalized = normalize_entries(entries)
    graph = DescriptorGraphBuilder().build(normalized)

    queries = resolver.resolve(normalized)
    result = WhyResult(query_descriptors=queries)
    if not queries:
        result.message = f"{config.query} not found in lockfile"
        return result

    paths = PathEnumerator(graph, visit_cap=config.visit_cap).find_paths(queries)
    paths = truncate_paths(paths, config.max_depth)
    paths.sort()
    result.paths = paths

    forest = TreeBuilder(graph.versions).build(paths)
    if config.dedup:
        forest = Deduplicator().dedup(forest)
    result.forest = forest

    if not forest:
        result.message = f"{config.query} not found in lockfile"
    logger.info("%s: %d path(s), %d root(s)", config.query, len(paths), len(forest))
    return result
