"""Public package surface for wikitree.

Exports the ``Wiki`` facade, the ``Page`` handle, version stores, and the
name/format helpers usable without resolving any page.
"""

from __future__ import annotations

from .errors import StoreReadError, VersionNotFoundError, WikiError
from .page import Page
from .page_names import (
    PageFormat,
    cname,
    format_for_filename,
    format_name,
    format_to_ext,
    page_filename,
    page_match,
    valid_filename,
    valid_page_name,
)
from .tree_search import TreeMatch, find_in_tree
from .version_store import Blob, Commit, GitVersionStore, LogOptions, MemoryVersionStore, Tree, VersionStore
from .wiki import Wiki

__all__ = [
    "Wiki",
    "Page",
    "PageFormat",
    "cname",
    "format_for_filename",
    "format_name",
    "format_to_ext",
    "page_filename",
    "page_match",
    "valid_filename",
    "valid_page_name",
    "TreeMatch",
    "find_in_tree",
    "Blob",
    "Commit",
    "Tree",
    "LogOptions",
    "VersionStore",
    "GitVersionStore",
    "MemoryVersionStore",
    "WikiError",
    "VersionNotFoundError",
    "StoreReadError",
]
