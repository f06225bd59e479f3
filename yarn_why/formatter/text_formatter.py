"""Indented tree rendering with box-drawing branch glyphs."""

from __future__ import annotations

from typing import Iterator

import click

from yarn_why.formatter.base import BaseFormatter
from yarn_why.models import TreeNode

BRANCH = "├─ "
LAST_BRANCH = "└─ "
PIPE = "│  "
SPACE = "   "


class TextFormatter(BaseFormatter):
    """Render one ``name@version (via range)`` line per node."""

    def format_forest(self, forest: list[TreeNode], color: bool = False) -> str:
        return "\n".join(self._lines(forest, "", color))

    def _lines(self, nodes: tuple[TreeNode, ...] | list[TreeNode], prefix: str, color: bool) -> Iterator[str]:
        for i, node in enumerate(nodes):
            last = i == len(nodes) - 1
            yield prefix + (LAST_BRANCH if last else BRANCH) + self.label(node, color)
            yield from self._lines(node.children, prefix + (SPACE if last else PIPE), color)

    @staticmethod
    def label(node: TreeNode, color: bool = False) -> str:
        """``name@version (via range)``; a dangling dependency has no version to show."""
        name, range_ = node.descriptor
        version = node.version
        if color:
            name = click.style(name, fg="cyan", bold=True)
            if version is not None:
                version = click.style(version, fg="green")
            range_ = click.style(range_, fg="yellow")
        head = name if version is None else f"{name}@{version}"
        return f"{head} (via {range_})"
