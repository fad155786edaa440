"""Page filename matching, canonical names, and markup format detection.

Everything here is pure: filenames in, stems/formats/booleans out.
Used by the tree search and by callers validating names before writing pages.
"""

from __future__ import annotations

import re
from enum import Enum


class PageFormat(str, Enum):
    """Markup dialect a page is written in, derived from its extension."""

    MARKDOWN = "markdown"
    TEXTILE = "textile"
    RDOC = "rdoc"
    ORG = "org"
    CREOLE = "creole"
    REST = "rest"
    ASCIIDOC = "asciidoc"
    POD = "pod"
    ROFF = "roff"


FORMAT_NAMES: dict[PageFormat, str] = {
    PageFormat.MARKDOWN: "Markdown",
    PageFormat.TEXTILE: "Textile",
    PageFormat.RDOC: "RDoc",
    PageFormat.ORG: "Org-mode",
    PageFormat.CREOLE: "Creole",
    PageFormat.REST: "reStructuredText",
    PageFormat.ASCIIDOC: "AsciiDoc",
    PageFormat.POD: "Pod",
    PageFormat.ROFF: "roff",
}

# roff pages are legacy man-page content and have no write extension.
FORMAT_EXTENSIONS: dict[PageFormat, str] = {
    PageFormat.MARKDOWN: "md",
    PageFormat.TEXTILE: "textile",
    PageFormat.RDOC: "rdoc",
    PageFormat.ORG: "org",
    PageFormat.CREOLE: "creole",
    PageFormat.REST: "rest",
    PageFormat.ASCIIDOC: "asciidoc",
    PageFormat.POD: "pod",
}

VALID_PAGE_RE = re.compile(
    r"(.+)\.(md|mkdn?|mdown|markdown|textile|rdoc|org|creole|re?st(\.txt)?|asciidoc|pod|\d)",
    re.IGNORECASE | re.ASCII,
)
_CNAME_RE = re.compile(r"[ /]")
_FORMAT_RULES: tuple[tuple[re.Pattern[str], PageFormat], ...] = (
    (re.compile(r"\.(md|mkdn?|mdown|markdown)$", re.IGNORECASE), PageFormat.MARKDOWN),
    (re.compile(r"\.textile$", re.IGNORECASE), PageFormat.TEXTILE),
    (re.compile(r"\.rdoc$", re.IGNORECASE), PageFormat.RDOC),
    (re.compile(r"\.org$", re.IGNORECASE), PageFormat.ORG),
    (re.compile(r"\.creole$", re.IGNORECASE), PageFormat.CREOLE),
    (re.compile(r"\.re?st(\.txt)?$", re.IGNORECASE), PageFormat.REST),
    (re.compile(r"\.asciidoc$", re.IGNORECASE), PageFormat.ASCIIDOC),
    (re.compile(r"\.pod$", re.IGNORECASE), PageFormat.POD),
    (re.compile(r"\.\d$", re.ASCII), PageFormat.ROFF),
)


def valid_filename(filename: str | None) -> str | None:
    """Return ``filename`` without its page extension, or ``None``.

    ``"Home.md"`` gives ``"Home"``; ``"notes.txt"`` gives ``None``.
    """
    if not filename:
        return None
    match = VALID_PAGE_RE.fullmatch(str(filename))
    if match is None:
        return None
    return match.group(1)


def valid_page_name(filename: str | None) -> str | None:
    """Like ``valid_filename`` but rejects ``_``-prefixed fragments (``_Footer.md``)."""
    stem = valid_filename(filename)
    if stem is None or str(filename).startswith("_"):
        return None
    return stem


def cname(name: str) -> str:
    """Convert a human page name into a canonical one.

    ``cname("Bilbo Baggins") == "Bilbo-Baggins"``. Slashes are folded the same
    way, so path-like names compare equal to their hyphenated form.
    """
    return _CNAME_RE.sub("-", name)


def page_match(name: str, filename: str) -> bool:
    """Return whether ``filename`` is a page file whose stem canonically equals ``name``."""
    stem = valid_filename(filename)
    if stem is None:
        return False
    return cname(name) == cname(stem)


def format_for_filename(filename: str | None) -> PageFormat | None:
    if not filename:
        return None
    for pattern, page_format in _FORMAT_RULES:
        if pattern.search(filename):
            return page_format
    return None


def format_to_ext(page_format: PageFormat | str | None) -> str | None:
    """Return the write extension for ``page_format`` (no leading period)."""
    if page_format is None:
        return None
    try:
        page_format = PageFormat(page_format)
    except ValueError:
        return None
    return FORMAT_EXTENSIONS.get(page_format)


def format_name(page_format: PageFormat | str) -> str:
    return FORMAT_NAMES[PageFormat(page_format)]


def page_filename(name: str, page_format: PageFormat | str) -> str | None:
    """Build the on-disk filename a new page called ``name`` would be written to."""
    ext = format_to_ext(page_format)
    if ext is None:
        return None
    return f"{cname(name)}.{ext}"


__all__ = [
    "PageFormat",
    "FORMAT_NAMES",
    "FORMAT_EXTENSIONS",
    "VALID_PAGE_RE",
    "valid_filename",
    "valid_page_name",
    "cname",
    "page_match",
    "format_for_filename",
    "format_to_ext",
    "format_name",
    "page_filename",
]
