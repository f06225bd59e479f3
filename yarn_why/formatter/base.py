"""Abstract base forest formatter."""

from __future__ import annotations

import abc

from yarn_why.models import TreeNode


class BaseFormatter(abc.ABC):
    """Base class for forest renderers."""

    @abc.abstractmethod
    def format_forest(self, forest: list[TreeNode], color: bool = False) -> str:
        """Render ``forest`` as a string without a trailing newline."""
