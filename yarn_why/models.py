"""Data models for the yarn-why query pipeline."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import NamedTuple


class Descriptor(NamedTuple):
    """A (package name, range) pair; the node key of the dependency graph."""
    name: str
    range: str

    def __str__(self) -> str:
        return f"{self.name}@{self.range}"


def split_descriptor(text: str) -> tuple[str, str | None]:
    """Split ``name@range`` into its parts.

    The separator is the first ``@`` after position 0, so scoped packages
    (``@types/node@^20``) and aliases (``alias@npm:real@^1``) split on the
    right character. A bare name returns ``(name, None)``.
    """
    text = text.strip()
    at = text.find("@", 1)
    if at == -1:
        return text, None
    return text[:at], text[at + 1:]


class NodeKind(enum.Enum):
    LEAF = "leaf"
    INTERNAL = "internal"


@dataclass
class Entry:
    """One resolved package record from the lockfile."""
    name: str
    version: str
    descriptors: tuple[Descriptor, ...] = ()
    dependencies: tuple[Descriptor, ...] = ()


@dataclass(frozen=True, eq=False)
class TreeNode:
    """A descriptor in the output forest, owning its ordered children."""
    descriptor: Descriptor
    version: str | None
    children: tuple[TreeNode, ...] = ()

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def kind(self) -> NodeKind:
        return NodeKind.LEAF if self.is_leaf else NodeKind.INTERNAL


@dataclass
class QueryConfig:
    """Configuration for a single query run."""
    query: str = ""
    version_filter: str | None = None
    max_depth: int | None = 10  # None means no limit
    dedup: bool = True
    visit_cap: int = 20


@dataclass
class WhyResult:
    """Outcome of a query: the forest, or the reason nothing was found."""
    query_descriptors: list[Descriptor] = field(default_factory=list)
    paths: list[tuple[Descriptor, ...]] = field(default_factory=list)
    forest: list[TreeNode] = field(default_factory=list)
    message: str | None = None

    @property
    def found(self) -> bool:
        return bool(self.forest)


class OutputFormat(enum.Enum):
    TEXT = "text"
    JSON = "json"
