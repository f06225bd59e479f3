"""Lockfile reader registry and dispatcher."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from yarn_why.exceptions import InputError
from yarn_why.lockfile.base import BaseLockfileParser
from yarn_why.lockfile.berry_parser import BerryLockfileParser
from yarn_why.lockfile.classic_parser import ClassicLockfileParser
from yarn_why.models import Entry

logger = logging.getLogger(__name__)

_BERRY_MARKER = re.compile(r"^__metadata:", re.MULTILINE)


def detect_parser(text: str) -> BaseLockfileParser:
    """Pick the reader matching the lockfile's format."""
    if _BERRY_MARKER.search(text):
        return BerryLockfileParser()
    return ClassicLockfileParser()


def parse_lockfile(text: str) -> list[Entry]:
    """Parse lockfile text into an ordered list of entries."""
    parser = detect_parser(text)
    logger.debug("parsing %s lockfile (%d bytes)", parser.format_name, len(text))
    return parser.parse(text)


def decode_lockfile(data: bytes) -> str:
    """Decode raw lockfile bytes, rejecting anything that is not UTF-8 text."""
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InputError(f"lockfile is not UTF-8 text: {e}") from e
    if "\x00" in text:
        raise InputError("lockfile is not text: contains NUL bytes")
    return text


def read_lockfile(path: Path) -> list[Entry]:
    """Read and parse a lockfile from disk."""
    try:
        data = path.read_bytes()
    except OSError as e:
        raise InputError(f"cannot read {path}: {e.strerror or e}") from e
    return parse_lockfile(decode_lockfile(data))


__all__ = [
    "BaseLockfileParser",
    "BerryLockfileParser",
    "ClassicLockfileParser",
    "decode_lockfile",
    "detect_parser",
    "parse_lockfile",
    "read_lockfile",
]
