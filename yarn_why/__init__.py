"""yarn-why: explain why a package is present in a yarn lockfile."""

__version__ = "0.2.0"
