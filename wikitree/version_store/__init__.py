"""Version-store contract plus the git-backed and in-memory implementations.

The page resolver only depends on the ``VersionStore`` protocol:
- commits resolved from version identifiers
- root trees and ordered tree children
- blob contents and per-path commit history
"""

from __future__ import annotations

from .types import Blob, Commit, LogOptions, Tree, TreeEntry, VersionStore
from .git import DEFAULT_GIT_TIMEOUT_SECONDS, GitVersionStore
from .memory import FileTreeSpec, MemoryVersionStore

__all__ = [
    "Blob",
    "Commit",
    "LogOptions",
    "Tree",
    "TreeEntry",
    "VersionStore",
    "DEFAULT_GIT_TIMEOUT_SECONDS",
    "GitVersionStore",
    "FileTreeSpec",
    "MemoryVersionStore",
]
