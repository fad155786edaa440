"""Breadth-first page lookup inside a versioned tree.

Walks a tree level by level, remembering each subtree's parent, and rebuilds
the directory path of the first file whose name matches the requested page.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass

from .log import get_logger
from .page_names import page_match
from .version_store.types import Blob, Tree, VersionStore

logger = get_logger(__name__)


@dataclass(frozen=True)
class TreeMatch:
    """A matching blob and its slash-separated path relative to the search root."""

    blob: Blob
    path: str


def tree_path(parents: dict[Tree, Tree], tree: Tree) -> str:
    """Return the path of ``tree`` relative to the root, or ``""`` for the root itself."""
    names: list[str] = []
    current = tree
    while current in parents:
        names.append(current.name)
        current = parents[current]
    names.reverse()
    return "/".join(names)


def find_in_tree(store: VersionStore, tree: Tree, name: str) -> TreeMatch | None:
    """Find the page file for human or canonical ``name`` below ``tree``.

    Entries are visited in store order, shallower levels first. Returns
    ``None`` when nothing matches; store read errors propagate.
    """
    parents: dict[Tree, Tree] = {}
    pending: deque[Tree] = deque([tree])

    while pending:
        current = pending.popleft()
        for entry in store.children_of(current):
            if isinstance(entry, Blob):
                if page_match(name, entry.name):
                    directory = tree_path(parents, current)
                    path = f"{directory}/{entry.name}" if directory else entry.name
                    logger.debug("page %r resolved to %s", name, path)
                    return TreeMatch(blob=entry, path=path)
            elif isinstance(entry, Tree):
                parents[entry] = current
                pending.append(entry)

    logger.debug("page %r not found under tree %s", name, tree.id)
    return None


__all__ = ["TreeMatch", "tree_path", "find_in_tree"]
