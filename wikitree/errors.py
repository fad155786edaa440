"""Exceptions raised by wikitree.

A missing page is not an error (lookups return ``None``); these cover an
unknown version identifier and failures inside the backing version store.
"""

from __future__ import annotations


class WikiError(Exception):
    """Base exception for all wikitree errors."""


class VersionNotFoundError(WikiError):
    """Raised when a version identifier does not resolve to a commit."""

    def __init__(self, version: str) -> None:
        self.version = version
        super().__init__(f"version not found: {version!r}")


class StoreReadError(WikiError):
    """Raised when the version store cannot read a tree, blob, or log.

    ``command`` holds the argv of the failing store command when there is one.
    """

    def __init__(self, message: str, command: list[str] | None = None) -> None:
        self.command = command
        super().__init__(message)


__all__ = [
    "WikiError",
    "VersionNotFoundError",
    "StoreReadError",
]
