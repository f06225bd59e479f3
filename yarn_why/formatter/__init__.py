"""Formatter registry."""

from __future__ import annotations

from yarn_why.formatter.base import BaseFormatter
from yarn_why.formatter.json_formatter import JsonFormatter, node_to_dict
from yarn_why.formatter.text_formatter import TextFormatter
from yarn_why.models import OutputFormat, TreeNode

_FORMATTERS: dict[OutputFormat, BaseFormatter] = {
    OutputFormat.TEXT: TextFormatter(),
    OutputFormat.JSON: JsonFormatter(),
}


def format_forest(
    forest: list[TreeNode],
    fmt: OutputFormat = OutputFormat.TEXT,
    color: bool = False,
) -> str:
    """Render a forest in the requested format."""
    formatter = _FORMATTERS.get(fmt)
    if formatter is None:
        raise ValueError(f"No formatter for format: {fmt}")
    return formatter.format_forest(forest, color=color and fmt is OutputFormat.TEXT)


__all__ = ["BaseFormatter", "JsonFormatter", "TextFormatter", "format_forest", "node_to_dict"]
