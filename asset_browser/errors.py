#!/usr/bin/env python3
"""Error kinds raised by the asset browser."""


class AssetBrowserError(Exception):
    """Base class for asset browser failures."""


class RulesetError(AssetBrowserError):
    """The asset dictionary is missing or malformed."""


class ConfigError(AssetBrowserError):
    """Required configuration is missing or invalid."""


class PathTraversalError(AssetBrowserError):
    """A relative path resolved outside the configured root."""

    def __init__(self, rel_path: str):
        super().__init__(f"Path traversal blocked: {rel_path!r}")
        self.rel_path = rel_path


class NotFoundError(AssetBrowserError):
    """A raw file target does not exist or is not a regular file."""


class ListingError(AssetBrowserError, OSError):
    """A directory could not be listed (missing, not a directory, or unreadable)."""

    def __init__(self, rel_path: str, reason: str):
        super().__init__(f"Cannot list {rel_path or '/'!s}: {reason}")
        self.rel_path = rel_path
        self.reason = reason
