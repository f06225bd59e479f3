"""Range normalization applied to lockfile entries before the graph is built."""

from __future__ import annotations

import logging

from yarn_why.models import Descriptor, Entry

logger = logging.getLogger(__name__)

PROTOCOL_PREFIXES = ("npm:", "workspace:")

_VCS_PREFIXES = (
    "git:", "git+", "github:", "gitlab:", "bitbucket:",
    "http://", "https://", "ssh://",
)


def strip_protocol(range_: str) -> str:
    """Remove a leading ``npm:`` or ``workspace:`` resolution protocol."""
    for prefix in PROTOCOL_PREFIXES:
        if range_.startswith(prefix):
            return range_[len(prefix):]
    return range_


def is_vcs_reference(range_: str) -> bool:
    if range_.startswith(_VCS_PREFIXES):
        return True
    return ".git#" in range_


def is_patch_duplicate(range_: str) -> bool:
    """True for ranges carrying a ``#`` fragment that is not a VCS ref."""
    if range_.startswith("patch:"):
        return True
    return "#" in range_ and not is_vcs_reference(range_)


def _normalize(descriptors: tuple[Descriptor, ...]) -> tuple[Descriptor, ...]:
    return tuple(
        Descriptor(d.name, strip_protocol(d.range))
        for d in descriptors
        if not is_patch_duplicate(d.range)
    )


def normalize_entries(entries: list[Entry]) -> list[Entry]:
    """Return canonical copies of ``entries``; inputs are left untouched.

    Entries whose every descriptor is a patch duplicate are dropped.
    """
    normalized: list[Entry] = []
    for entry in entries:
        descriptors = _normalize(entry.descriptors)
        if not descriptors:
            logger.debug("dropping patch entry %s@%s", entry.name, entry.version)
            continue
        normalized.append(Entry(
            name=entry.name,
            version=entry.version,
            descriptors=descriptors,
            dependencies=_normalize(entry.dependencies),
        ))
    return normalized
