"""JSON rendering of the forest."""

from __future__ import annotations

import json

from yarn_why.formatter.base import BaseFormatter
from yarn_why.models import TreeNode


def node_to_dict(node: TreeNode) -> dict:
    """Serialize a node.

    ``version`` is null only for a dangling dependency: a range some entry
    requires that no lockfile entry resolves. ``children`` is omitted for leaves.
    """
    data: dict = {
        "descriptor": str(node.descriptor),
        "version": node.version,
    }
    if node.children:
        data["children"] = [node_to_dict(c) for c in node.children]
    return data


class JsonFormatter(BaseFormatter):
    """Render the forest as a JSON list of root nodes. Never colored."""

    def format_forest(self, forest: list[TreeNode], color: bool = False) -> str:
        return json.dumps([node_to_dict(root) for root in forest], indent=2, ensure_ascii=False)
