"""Forest construction and de-duplication."""

from __future__ import annotations

from yarn_why.tree.builder import TreeBuilder
from yarn_why.tree.dedup import Deduplicator, classify

__all__ = ["Deduplicator", "TreeBuilder", "classify"]
