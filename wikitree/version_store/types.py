"""Domain datatypes and the store contract for versioned page trees."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class Commit:
    """Immutable snapshot of the whole tree at one point in history."""

    id: str
    tree_id: str
    author_name: str = ""
    author_email: str = ""
    authored_at: int = 0
    message: str = ""


@dataclass(frozen=True, eq=False)
class Blob:
    """File node in a tree snapshot.

    Compared by identity: two blobs with the same object id at different
    paths are different nodes.
    """

    id: str
    name: str


@dataclass(frozen=True, eq=False)
class Tree:
    """Directory node in a tree snapshot; the root tree has an empty name.

    Compared by identity so nodes can key a parent map during one search.
    """

    id: str
    name: str = ""


TreeEntry = Blob | Tree


@dataclass(frozen=True)
class LogOptions:
    """Window into a commit log: at most ``max_count`` commits after ``skip``."""

    max_count: int
    skip: int = 0


class VersionStore(Protocol):
    """Read-only access to commits, trees, blobs, and path history."""

    def commit(self, version: str) -> Commit:
        """Resolve ``version`` or raise ``VersionNotFoundError``."""
        ...

    def tree_of(self, commit: Commit) -> Tree:
        ...

    def children_of(self, tree: Tree) -> Sequence[TreeEntry]:
        ...

    def data_of(self, blob: Blob) -> bytes:
        ...

    def log(self, version: str, path: str, options: LogOptions) -> list[Commit]:
        """Return commits reachable from ``version`` touching ``path``, newest first."""
        ...


__all__ = [
    "Commit",
    "Blob",
    "Tree",
    "TreeEntry",
    "LogOptions",
    "VersionStore",
]
