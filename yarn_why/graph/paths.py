"""Path enumerator: every root-to-query path through the reverse graph."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Iterator

from yarn_why.graph.builder import DescriptorGraph
from yarn_why.models import Descriptor

logger = logging.getLogger(__name__)

DEFAULT_VISIT_CAP = 20


def splice_cycles(path: list[int]) -> tuple[int, ...]:
    """Cut every loop out of a root-first path.

    When a node shows up again, everything after its leftmost occurrence is
    discarded, so a path revisiting the query ends at its first occurrence.
    """
    out: list[int] = []
    position: dict[int, int] = {}
    for node in path:
        at = position.get(node)
        if at is None:
            position[node] = len(out)
            out.append(node)
            continue
        for dropped in out[at + 1:]:
            del position[dropped]
        del out[at + 1:]
    return tuple(out)


class PathEnumerator:
    """Depth-first walk from query descriptors up to the roots.

    Each descriptor may be entered at most ``visit_cap`` times per query
    descriptor; branches beyond the cap are dropped silently.
    """

    def __init__(self, graph: DescriptorGraph, visit_cap: int = DEFAULT_VISIT_CAP):
        if visit_cap < 1:
            raise ValueError("visit_cap must be at least 1")
        self.graph = graph
        self.visit_cap = visit_cap

    def find_paths(self, queries: list[Descriptor]) -> list[tuple[Descriptor, ...]]:
        """Collect unique paths for all ``queries``; ordering is left to the caller."""
        collected: dict[tuple[int, ...], None] = {}
        for query in queries:
            if not self.graph.has_parent_entry(query):
                logger.debug("%s has no requesters", query)
                continue
            for path in self._walk(self.graph.index[query]):
                collected.setdefault(path, None)

        nodes = self.graph.nodes
        paths = [tuple(nodes[i] for i in path) for path in collected]
        if not paths and queries:
            paths = self._fallback(queries[0])
        logger.debug("collected %d path(s) for %d query descriptor(s)", len(paths), len(queries))
        return paths

    def _fallback(self, query: Descriptor) -> list[tuple[Descriptor, ...]]:
        """A query nobody requires is its own root, if some entry carries it."""
        for entry in self.graph.entries:
            if entry.name == query.name and query in entry.descriptors:
                return [(query,)]
        return []

    def _walk(self, start: int) -> list[tuple[int, ...]]:
        visits: Counter[int] = Counter()
        stack: list[int] = []
        found: list[tuple[int, ...]] = []
        capped = 0

        def enter(node: int) -> Iterator[int] | None:
            visits[node] += 1
            stack.append(node)
            parents = self.graph.parents.get(node)
            if parents:
                return iter(parents)
            found.append(splice_cycles(stack[::-1]))
            stack.pop()
            return None

        first = enter(start)
        frames = [first] if first is not None else []
        while frames:
            for parent in frames[-1]:
                if visits[parent] >= self.visit_cap:
                    capped += 1
                    continue
                nested = enter(parent)
                if nested is not None:
                    frames.append(nested)
                    break
            else:
                frames.pop()
                stack.pop()

        if capped:
            logger.debug(
                "visit cap %d cut %d branch(es) below %s",
                self.visit_cap, capped, self.graph.nodes[start],
            )
        return found
