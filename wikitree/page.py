"""Page handle: a wiki page file resolved at a specific commit.

A ``Page`` starts empty, is populated once by a successful lookup, and then
exposes the file's name, path, raw bytes, detected format, rendered HTML,
and the history of commits touching it.
"""

from __future__ import annotations

import posixpath
from typing import TYPE_CHECKING

from .log import get_logger
from .markup import decode_text
from .page_names import PageFormat, format_for_filename, format_name, valid_filename
from .pagination import log_pagination_options
from .tree_search import find_in_tree
from .version_store.types import Blob, Commit, Tree

if TYPE_CHECKING:
    from .wiki import Wiki

logger = get_logger(__name__)

_UNRENDERED = object()


class Page:
    """One page of a ``Wiki``, bound to a blob, its path, and a commit."""

    def __init__(self, wiki: Wiki) -> None:
        self.wiki = wiki
        self._blob: Blob | None = None
        self._path: str | None = None
        self._version: Commit | None = None
        self._formatted: object = _UNRENDERED

    def __repr__(self) -> str:
        version_id = self._version.id[:7] if self._version is not None else None
        return f"<Page path={self._path!r} version={version_id!r}>"

    @property
    def blob(self) -> Blob | None:
        return self._blob

    @property
    def name(self) -> str | None:
        """On-disk filename of the page including extension."""
        return self._blob.name if self._blob is not None else None

    @property
    def filename_stem(self) -> str | None:
        return valid_filename(self.name)

    @property
    def path(self) -> str | None:
        """Path of the page file within the tree, without a leading slash."""
        return self._path

    @property
    def directory(self) -> str | None:
        """Directory part of ``path``; ``""`` for pages at the tree root."""
        if self._path is None:
            return None
        return posixpath.dirname(self._path)

    @property
    def raw_data(self) -> bytes | None:
        if self._blob is None:
            return None
        return self.wiki.store.data_of(self._blob)

    @property
    def text(self) -> str | None:
        data = self.raw_data
        return decode_text(data) if data is not None else None

    @property
    def format(self) -> PageFormat | None:
        return format_for_filename(self.name)

    @property
    def format_name(self) -> str | None:
        page_format = self.format
        return format_name(page_format) if page_format is not None else None

    @property
    def formatted_data(self) -> str | None:
        """Rendered HTML for the page, computed on first access."""
        if self._blob is None:
            return None
        if self._formatted is _UNRENDERED:
            self._formatted = self.wiki.renderer.render(self.text or "", self.format, self._blob.name)
        return self._formatted  # type: ignore[return-value]

    @property
    def version(self) -> Commit | None:
        """Commit this page was resolved at."""
        return self._version

    @version.setter
    def version(self, commit: Commit) -> None:
        if self._version is not None:
            raise ValueError(f"page version already set to {self._version.id}")
        self._version = commit

    def versions(self, page: int | None = None, per_page: int | None = None) -> list[Commit]:
        """Return commits that touched this page, newest first.

        ``page`` is 1-based; ``per_page`` defaults to the wiki's page size.
        History starts at the page's bound version, or the wiki's default
        version when none is bound.
        """
        if self._path is None:
            raise ValueError("page has not been resolved")
        options = log_pagination_options(page, per_page, self.wiki.per_page)
        start = self._version.id if self._version is not None else self.wiki.default_version
        return self.wiki.store.log(start, self._path, options)

    def find(self, name: str, version: str) -> Page | None:
        """Resolve ``name`` at ``version`` and bind this page to the result.

        Raises ``VersionNotFoundError`` for an unknown version; returns
        ``None`` when no page file matches.
        """
        commit = self.wiki.store.commit(version)
        page = self.find_in_tree(self.wiki.store.tree_of(commit), name)
        if page is None:
            logger.debug("no page %r at %s", name, commit.id)
            return None
        page.version = commit
        return page

    def find_in_tree(self, tree: Tree, name: str) -> Page | None:
        """Populate this page from the first match for ``name`` under ``tree``.

        The version is left unset; callers that resolved ``tree`` from a
        commit assign it.
        """
        match = find_in_tree(self.wiki.store, tree, name)
        if match is None:
            return None
        return self.populate(match.blob, match.path)

    def populate(self, blob: Blob, path: str) -> Page:
        if self._blob is not None:
            raise ValueError(f"page already populated from {self._path}")
        if posixpath.basename(path) != blob.name:
            raise ValueError(f"path {path!r} does not end with {blob.name!r}")
        self._blob = blob
        self._path = path
        return self


__all__ = ["Page"]
