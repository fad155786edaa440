"""In-process version store with git-like content addressing.

Commits are built from nested dicts (``{"docs": {"Home.md": b"..."}}``) and
kept in a linear history per ref. Useful for embedding and fixtures where a
real repository would be overkill.
"""

from __future__ import annotations

import hashlib
from collections.abc import Mapping
from itertools import count

from ..errors import StoreReadError, VersionNotFoundError
from .types import Blob, Commit, LogOptions, Tree, TreeEntry

FileTreeSpec = Mapping[str, "bytes | str | FileTreeSpec"]

_BLOB = "blob"
_TREE = "tree"
_MIN_ABBREV = 4


def _object_id(kind: str, payload: bytes) -> str:
    digest = hashlib.sha1()
    digest.update(f"{kind} {len(payload)}\0".encode("ascii"))
    digest.update(payload)
    return digest.hexdigest()


class MemoryVersionStore:
    """Version store holding every object in dictionaries."""

    def __init__(self) -> None:
        self._blobs: dict[str, bytes] = {}
        self._trees: dict[str, tuple[tuple[str, str, str], ...]] = {}
        self._commits: dict[str, Commit] = {}
        self._parents: dict[str, str | None] = {}
        self._refs: dict[str, str] = {}
        self._clock = count(1)

    def _write_blob(self, data: bytes | str) -> str:
        payload = data.encode("utf-8") if isinstance(data, str) else bytes(data)
        blob_id = _object_id(_BLOB, payload)
        self._blobs[blob_id] = payload
        return blob_id

    def _write_tree(self, files: FileTreeSpec) -> str:
        entries: list[tuple[str, str, str]] = []
        for name in sorted(files):
            if not name or "/" in name:
                raise ValueError(f"invalid tree entry name: {name!r}")
            value = files[name]
            if isinstance(value, Mapping):
                entries.append((_TREE, self._write_tree(value), name))
            else:
                entries.append((_BLOB, self._write_blob(value), name))
        payload = "".join(f"{kind} {object_id}\t{name}\0" for kind, object_id, name in entries)
        tree_id = _object_id(_TREE, payload.encode("utf-8"))
        self._trees[tree_id] = tuple(entries)
        return tree_id

    def add_commit(
        self,
        ref: str,
        files: FileTreeSpec,
        *,
        message: str = "",
        author_name: str = "wikitree",
        author_email: str = "wikitree@localhost",
    ) -> Commit:
        """Record a snapshot of ``files`` on top of ``ref`` and advance the ref."""
        tree_id = self._write_tree(files)
        parent_id = self._refs.get(ref)
        authored_at = next(self._clock)
        header = f"tree {tree_id}\nparent {parent_id or ''}\nauthor {author_name} <{author_email}> {authored_at}\n\n{message}"
        commit = Commit(
            id=_object_id("commit", header.encode("utf-8")),
            tree_id=tree_id,
            author_name=author_name,
            author_email=author_email,
            authored_at=authored_at,
            message=message,
        )
        self._commits[commit.id] = commit
        self._parents[commit.id] = parent_id
        self._refs[ref] = commit.id
        return commit

    def commit(self, version: str) -> Commit:
        if version in self._refs:
            return self._commits[self._refs[version]]
        if version in self._commits:
            return self._commits[version]
        if version and len(version) >= _MIN_ABBREV:
            candidates = [commit_id for commit_id in self._commits if commit_id.startswith(version)]
            if len(candidates) == 1:
                return self._commits[candidates[0]]
        raise VersionNotFoundError(version)

    def tree_of(self, commit: Commit) -> Tree:
        return Tree(id=commit.tree_id, name="")

    def children_of(self, tree: Tree) -> list[TreeEntry]:
        entries = self._trees.get(tree.id)
        if entries is None:
            raise StoreReadError(f"tree object not found: {tree.id}")
        children: list[TreeEntry] = []
        for kind, object_id, name in entries:
            if kind == _TREE:
                children.append(Tree(id=object_id, name=name))
            else:
                children.append(Blob(id=object_id, name=name))
        return children

    def data_of(self, blob: Blob) -> bytes:
        data = self._blobs.get(blob.id)
        if data is None:
            raise StoreReadError(f"blob object not found: {blob.id}")
        return data

    def _object_at(self, tree_id: str, path: str) -> str | None:
        """Return the id of the object at ``path`` under ``tree_id``, if any."""
        object_id = tree_id
        for part in (segment for segment in path.split("/") if segment):
            entries = self._trees.get(object_id)
            if entries is None:
                return None
            object_id = next((entry_id for _kind, entry_id, name in entries if name == part), None)
            if object_id is None:
                return None
        return object_id

    def log(self, version: str, path: str, options: LogOptions) -> list[Commit]:
        commit_id: str | None = self.commit(version).id
        matched: list[Commit] = []
        skipped = 0
        while commit_id is not None and len(matched) < options.max_count:
            commit = self._commits[commit_id]
            parent_id = self._parents[commit_id]
            current = self._object_at(commit.tree_id, path)
            previous = self._object_at(self._commits[parent_id].tree_id, path) if parent_id else None
            if current != previous:
                if skipped < options.skip:
                    skipped += 1
                else:
                    matched.append(commit)
            commit_id = parent_id
        return matched


__all__ = ["MemoryVersionStore", "FileTreeSpec"]
