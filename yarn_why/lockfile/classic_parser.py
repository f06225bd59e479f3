"""Reader for classic (v1) yarn.lock files."""

from __future__ import annotations

import json
import logging

from yarn_why.exceptions import InputError
from yarn_why.lockfile.base import BaseLockfileParser
from yarn_why.models import Descriptor, Entry

logger = logging.getLogger(__name__)

_DEPENDENCY_BLOCKS = {"dependencies", "optionalDependencies"}


def _unquote(token: str, where: str) -> str:
    token = token.strip()
    if token.startswith('"'):
        try:
            return json.loads(token)
        except json.JSONDecodeError as e:
            raise InputError(f"{where}: bad quoted string {token}") from e
    return token


def _split_pair(line: str, where: str) -> tuple[str, str]:
    """Split ``key value`` where either side may be double-quoted."""
    line = line.strip()
    if line.startswith('"'):
        end = line.find('"', 1)
        while end != -1 and line[end - 1] == "\\":
            end = line.find('"', end + 1)
        if end == -1:
            raise InputError(f"{where}: unterminated quote")
        key, rest = line[:end + 1], line[end + 1:]
    else:
        key, _, rest = line.partition(" ")
    if not rest.strip():
        raise InputError(f"{where}: expected 'key value', got {line!r}")
    return _unquote(key, where), _unquote(rest, where)


class ClassicLockfileParser(BaseLockfileParser):
    """Line-oriented reader for the ``# yarn lockfile v1`` format."""

    format_name = "classic"

    def parse(self, text: str) -> list[Entry]:
        entries: list[Entry] = []
        current: Entry | None = None
        dependencies: list[Descriptor] = []
        block: str | None = None

        def finish(lineno: int) -> None:
            if current is None:
                return
            if not current.version:
                raise InputError(f"line {lineno}: entry {current.name!r} has no version")
            current.dependencies = tuple(dependencies)
            entries.append(current)

        for lineno, raw in enumerate(text.splitlines(), start=1):
            where = f"line {lineno}"
            if not raw.strip() or raw.lstrip().startswith("#"):
                continue
            indent = len(raw) - len(raw.lstrip(" "))
            line = raw.strip()

            if indent == 0:
                if not line.endswith(":"):
                    raise InputError(f"{where}: expected an entry header, got {line!r}")
                finish(lineno)
                descriptors = self.parse_header(line[:-1], where)
                current = Entry(
                    name=descriptors[0].name,
                    version="",
                    descriptors=descriptors,
                )
                dependencies = []
                block = None
                continue

            if current is None:
                raise InputError(f"{where}: indented line outside of an entry")

            if indent == 2:
                block = None
                if line.endswith(":"):
                    block = line[:-1]
                    continue
                key, value = _split_pair(line, where)
                if key == "version":
                    current.version = value
                continue

            if block in _DEPENDENCY_BLOCKS:
                name, range_ = _split_pair(line, where)
                dependencies.append(Descriptor(name, range_))

        finish(len(text.splitlines()))
        logger.debug("classic lockfile: %d entries", len(entries))
        return entries
