"""Abstract base lockfile parser."""

from __future__ import annotations

import abc

from yarn_why.exceptions import InputError
from yarn_why.models import Descriptor, Entry, split_descriptor


class BaseLockfileParser(abc.ABC):
    """Base class for yarn lockfile format readers."""

    format_name: str

    @abc.abstractmethod
    def parse(self, text: str) -> list[Entry]:
        """Parse lockfile text into entries, in file order."""

    @staticmethod
    def parse_header(header: str, where: str) -> tuple[Descriptor, ...]:
        """Split a comma-separated entry key into its descriptors."""
        descriptors: list[Descriptor] = []
        for part in header.split(","):
            part = part.strip().strip('"')
            if not part:
                continue
            name, range_ = split_descriptor(part)
            if range_ is None:
                raise InputError(f"{where}: descriptor {part!r} has no range")
            descriptors.append(Descriptor(name, range_))
        if not descriptors:
            raise InputError(f"{where}: entry has no descriptors")
        return tuple(descriptors)
