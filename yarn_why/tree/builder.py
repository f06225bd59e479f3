"""Tree builder: merge sorted paths into a forest sharing common prefixes."""

from __future__ import annotations

import logging
from typing import Mapping

from yarn_why.models import Descriptor, TreeNode

logger = logging.getLogger(__name__)

_NO_PARENT = -1


class TreeBuilder:
    """Merge root-first paths into a forest.

    Paths must be sorted so that paths sharing a prefix are adjacent. Nodes
    are staged in an arena and frozen into :class:`TreeNode` values at the end.
    """

    def __init__(self, versions: Mapping[Descriptor, str]):
        self.versions = versions

    def build(self, paths: list[tuple[Descriptor, ...]]) -> list[TreeNode]:
        labels: list[Descriptor] = []
        children: list[list[int]] = []
        registry: dict[tuple[int, Descriptor], int] = {}
        roots: list[int] = []

        def fetch_or_create(parent: int, descriptor: Descriptor) -> tuple[int, bool]:
            key = (parent, descriptor)
            slot = registry.get(key)
            if slot is not None:
                return slot, False
            slot = len(labels)
            labels.append(descriptor)
            children.append([])
            registry[key] = slot
            return slot, True

        previous: tuple[Descriptor, ...] = ()
        previous_slots: list[int] = []
        for path in paths:
            shared = 0
            limit = min(len(path), len(previous))
            while shared < limit and path[shared] == previous[shared]:
                shared += 1

            slots = previous_slots[:shared]
            for i in range(shared, len(path)):
                if i == 0:
                    slot, created = fetch_or_create(_NO_PARENT, path[0])
                    if created:
                        roots.append(slot)
                else:
                    parent = slots[i - 1]
                    slot, _ = fetch_or_create(parent, path[i])
                    if slot not in children[parent]:
                        children[parent].append(slot)
                slots.append(slot)

            previous, previous_slots = path, slots

        # A child is always staged after its parent, so freezing in reverse
        # creation order sees every child before the node that owns it.
        frozen: list[TreeNode | None] = [None] * len(labels)
        for slot in range(len(labels) - 1, -1, -1):
            descriptor = labels[slot]
            frozen[slot] = TreeNode(
                descriptor=descriptor,
                version=self.versions.get(descriptor),
                children=tuple(frozen[c] for c in children[slot]),
            )

        logger.debug("tree: %d root(s), %d node(s) from %d path(s)", len(roots), len(labels), len(paths))
        return [frozen[r] for r in roots]
