"""Reader for Yarn Berry (v2+) lockfiles, which are YAML documents."""

from __future__ import annotations

import logging

import yaml

from yarn_why.exceptions import InputError
from yarn_why.lockfile.base import BaseLockfileParser
from yarn_why.models import Descriptor, Entry

logger = logging.getLogger(__name__)

_DEPENDENCY_KEYS = ("dependencies", "optionalDependencies")


class BerryLockfileParser(BaseLockfileParser):
    """YAML reader for lockfiles carrying a ``__metadata`` section."""

    format_name = "berry"

    def parse(self, text: str) -> list[Entry]:
        try:
            # Berry writes every scalar as a string; BaseLoader keeps them that way.
            data = yaml.load(text, Loader=yaml.BaseLoader)
        except yaml.YAMLError as e:
            raise InputError(f"invalid YAML lockfile: {e}") from e

        if not isinstance(data, dict):
            raise InputError("lockfile is not a mapping of entries")

        entries: list[Entry] = []
        for key, value in data.items():
            if key == "__metadata":
                continue
            where = f"entry {key!r}"
            if not isinstance(value, dict):
                raise InputError(f"{where}: expected a mapping")
            if "version" not in value:
                raise InputError(f"{where}: missing version")

            descriptors = self.parse_header(key, where)
            dependencies: list[Descriptor] = []
            for dep_key in _DEPENDENCY_KEYS:
                deps = value.get(dep_key) or {}
                if not isinstance(deps, dict):
                    raise InputError(f"{where}: {dep_key} is not a mapping")
                for name, range_ in deps.items():
                    dependencies.append(Descriptor(name, range_))

            entries.append(Entry(
                name=descriptors[0].name,
                version=value["version"],
                descriptors=descriptors,
                dependencies=tuple(dependencies),
            ))

        logger.debug("berry lockfile: %d entries", len(entries))
        return entries
