"""Query resolution: turn a user query into graph node keys."""

from __future__ import annotations

import logging

from semantic_version import NpmSpec, Version

from yarn_why.exceptions import ArgumentError
from yarn_why.graph.normalize import strip_protocol
from yarn_why.models import Descriptor, Entry, split_descriptor

logger = logging.getLogger(__name__)


def parse_query(token: str) -> tuple[str, str | None]:
    """Split a query token into ``(name, range)``; range is None for bare names."""
    name, range_ = split_descriptor(token)
    if not name:
        raise ArgumentError(f"invalid package query {token!r}")
    if range_ is not None:
        range_ = strip_protocol(range_.strip())
        if not range_:
            raise ArgumentError(f"invalid package query {token!r}: empty range")
    return name, range_


def parse_version_filter(text: str) -> NpmSpec:
    try:
        return NpmSpec(text)
    except ValueError as e:
        raise ArgumentError(f"invalid version filter {text!r}: {e}") from e


def _satisfies(spec: NpmSpec, version: str) -> bool:
    try:
        return spec.match(Version(version))
    except ValueError:
        logger.debug("version %r is not semver; excluded by filter", version)
        return False


class QueryResolver:
    """Map a package query onto the descriptors that name it."""

    def __init__(self, name: str, range_: str | None = None):
        self.name = name
        self.range = range_

    @classmethod
    def from_token(cls, token: str) -> QueryResolver:
        return cls(*parse_query(token))

    def has_package(self, entries: list[Entry]) -> bool:
        return any(e.name == self.name for e in entries)

    def carries_range(self, entries: list[Entry]) -> bool:
        """True when some entry of the package resolves the explicit query range."""
        return any(
            e.name == self.name and strip_protocol(d.range) == self.range
            for e in entries
            for d in e.descriptors
            if d.name == self.name
        )

    def apply_version_filter(self, entries: list[Entry], spec: NpmSpec) -> list[Entry]:
        """Drop entries of the queried package whose version fails ``spec``."""
        kept: list[Entry] = []
        for entry in entries:
            if entry.name == self.name and not _satisfies(spec, entry.version):
                logger.debug("filtered out %s@%s", entry.name, entry.version)
                continue
            kept.append(entry)
        return kept

    def resolve(self, entries: list[Entry]) -> list[Descriptor]:
        """Return the query descriptors, in lockfile order.

        An explicit range is used as-is even when nothing in the lockfile
        carries it. A bare name expands to every descriptor of that package.
        """
        if self.range is not None:
            return [Descriptor(self.name, self.range)]

        found: list[Descriptor] = []
        for entry in entries:
            for descriptor in entry.descriptors:
                if descriptor.name == self.name and descriptor not in found:
                    found.append(descriptor)
        logger.debug("query %s resolved to %d descriptor(s)", self.name, len(found))
        return found
