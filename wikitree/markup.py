"""HTML rendering of page content.

Pages are rendered by a ``MarkupRenderer`` keyed by their detected format.
The default renderer highlights the markup source through Pygments.
"""

from __future__ import annotations

from typing import Protocol

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import TextLexer, get_lexer_by_name, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .log import get_logger
from .page_names import PageFormat

logger = get_logger(__name__)

FALLBACK_STYLE = "default"

_LEXER_NAMES: dict[PageFormat, str] = {
    PageFormat.MARKDOWN: "markdown",
    PageFormat.REST: "rst",
    PageFormat.ROFF: "groff",
}
_VALID_STYLES: set[str] = set()
_INVALID_STYLES: set[str] = set()


class MarkupRenderer(Protocol):
    def render(self, text: str, page_format: PageFormat | None, name: str) -> str:
        """Return HTML for ``text`` written in ``page_format``."""
        ...


def decode_text(data: bytes) -> str:
    """Decode page bytes using tolerant encoding fallback order.

    Attempts UTF-8 and UTF-8 with BOM, then latin-1, which accepts any byte
    sequence.
    """
    for encoding in ("utf-8", "utf-8-sig"):
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            continue
    return data.decode("latin-1")


def normalize_style(style: str) -> str:
    """Return ``style`` when Pygments knows it, otherwise ``FALLBACK_STYLE``."""
    if style in _VALID_STYLES:
        return style
    if style in _INVALID_STYLES:
        return FALLBACK_STYLE
    try:
        get_style_by_name(style)
    except ClassNotFound:
        logger.warning("unknown pygments style %r, using %r", style, FALLBACK_STYLE)
        _INVALID_STYLES.add(style)
        return FALLBACK_STYLE
    _VALID_STYLES.add(style)
    return style


def lexer_for(page_format: PageFormat | None, name: str, text: str):
    """Pick a lexer by format, then by filename, then plain text."""
    lexer_name = _LEXER_NAMES.get(page_format) if page_format is not None else None
    if lexer_name is not None:
        try:
            return get_lexer_by_name(lexer_name)
        except ClassNotFound:
            pass
    try:
        return get_lexer_for_filename(name, text)
    except ClassNotFound:
        return TextLexer()


class PygmentsMarkupRenderer:
    """Render page source as highlighted HTML."""

    def __init__(self, style: str = FALLBACK_STYLE) -> None:
        self.style = normalize_style(style)
        self._formatters: dict[str, HtmlFormatter] = {}

    def _formatter_for(self, page_format: PageFormat | None) -> HtmlFormatter:
        css_class = f"markup markup-{page_format.value}" if page_format is not None else "markup"
        formatter = self._formatters.get(css_class)
        if formatter is None:
            formatter = HtmlFormatter(style=self.style, cssclass=css_class)
            self._formatters[css_class] = formatter
        return formatter

    def render(self, text: str, page_format: PageFormat | None, name: str) -> str:
        lexer = lexer_for(page_format, name, text)
        return highlight(text, lexer, self._formatter_for(page_format))

    def style_defs(self) -> str:
        """Return the CSS rules for this renderer's style."""
        return HtmlFormatter(style=self.style).get_style_defs(".markup")


__all__ = [
    "FALLBACK_STYLE",
    "MarkupRenderer",
    "PygmentsMarkupRenderer",
    "decode_text",
    "normalize_style",
    "lexer_for",
]
