"""Descriptor graph builder: reverse adjacency from child to requesting parents."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from yarn_why.models import Descriptor, Entry

logger = logging.getLogger(__name__)


@dataclass
class DescriptorGraph:
    """Arena of descriptors with parent edges stored as index lists."""
    entries: list[Entry] = field(default_factory=list)
    nodes: list[Descriptor] = field(default_factory=list)
    index: dict[Descriptor, int] = field(default_factory=dict)
    parents: dict[int, list[int]] = field(default_factory=dict)  # child -> [parents]
    versions: dict[Descriptor, str] = field(default_factory=dict)

    def intern(self, descriptor: Descriptor) -> int:
        idx = self.index.get(descriptor)
        if idx is None:
            idx = len(self.nodes)
            self.nodes.append(descriptor)
            self.index[descriptor] = idx
        return idx

    def has_parent_entry(self, descriptor: Descriptor) -> bool:
        """True when ``descriptor`` is required by at least one entry."""
        idx = self.index.get(descriptor)
        return idx is not None and idx in self.parents

    def parents_of(self, descriptor: Descriptor) -> list[Descriptor]:
        idx = self.index.get(descriptor)
        if idx is None:
            return []
        return [self.nodes[p] for p in self.parents.get(idx, [])]


class DescriptorGraphBuilder:
    """Build a :class:`DescriptorGraph` from normalized entries."""

    def build(self, entries: list[Entry]) -> DescriptorGraph:
        graph = DescriptorGraph(entries=list(entries))

        for entry in entries:
            for descriptor in entry.descriptors:
                graph.intern(descriptor)
                graph.versions[descriptor] = entry.version

        edges = 0
        for entry in entries:
            owners = [graph.index[d] for d in entry.descriptors]
            for dependency in entry.dependencies:
                child = graph.intern(dependency)
                parent_list = graph.parents.setdefault(child, [])
                for owner in owners:
                    if owner not in parent_list:
                        parent_list.append(owner)
                        edges += 1

        logger.debug(
            "descriptor graph: %d nodes, %d children with parents, %d edges",
            len(graph.nodes), len(graph.parents), edges,
        )
        return graph
