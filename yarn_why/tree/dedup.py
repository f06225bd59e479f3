"""Collapse repeated subtrees in a forest while keeping the queried leaves."""

from __future__ import annotations

import logging

from yarn_why.models import Descriptor, NodeKind, TreeNode

logger = logging.getLogger(__name__)


def classify(forest: list[TreeNode]) -> dict[TreeNode, NodeKind]:
    """Tag every node of ``forest`` as a leaf or an internal node."""
    kinds: dict[TreeNode, NodeKind] = {}
    pending = list(forest)
    while pending:
        node = pending.pop()
        kinds[node] = node.kind
        pending.extend(node.children)
    return kinds


class Deduplicator:
    """Copy a forest, expanding each descriptor's subtree only once.

    The first occurrence in depth-first order keeps its full subtree. A
    later occurrence of the same descriptor keeps only its leaf children,
    so the queried package stays visible under every branch reaching it.
    """

    def dedup(self, forest: list[TreeNode]) -> list[TreeNode]:
        kinds = classify(forest)
        seen: set[Descriptor] = set()
        collapsed = 0

        def copy(node: TreeNode) -> TreeNode:
            nonlocal collapsed
            if node.descriptor in seen:
                kept = [c for c in node.children if kinds[c] is NodeKind.LEAF]
                if len(kept) != len(node.children):
                    collapsed += 1
                return TreeNode(node.descriptor, node.version, tuple(copy(c) for c in kept))
            seen.add(node.descriptor)
            return TreeNode(node.descriptor, node.version, tuple(copy(c) for c in node.children))

        # The synthetic super-root: its children are the forest's roots.
        result = [copy(root) for root in forest]
        logger.debug("dedup collapsed %d repeated subtree(s)", collapsed)
        return result
