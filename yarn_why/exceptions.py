"""Error types raised by the yarn-why core."""

from __future__ import annotations


class YarnWhyError(Exception):
    """Base class for yarn-why errors."""


class InputError(YarnWhyError, ValueError):
    """The lockfile is malformed or not text."""


class ArgumentError(YarnWhyError, ValueError):
    """A query, filter range or flag combination is invalid."""
