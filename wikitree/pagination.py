"""Translate page/per-page history requests into commit-log windows."""

from __future__ import annotations

from .version_store.types import LogOptions

DEFAULT_PER_PAGE = 30


def page_to_skip(page: int | None, per_page: int) -> int:
    """Return the number of log entries before 1-based ``page``.

    Missing or non-positive page numbers are treated as the first page.
    """
    page_number = max(1, int(page or 1))
    return (page_number - 1) * per_page


def log_pagination_options(
    page: int | None = None,
    per_page: int | None = None,
    default_per_page: int = DEFAULT_PER_PAGE,
) -> LogOptions:
    """Build ``LogOptions`` for one page of history.

    A missing or non-positive ``per_page`` falls back to ``default_per_page``.
    """
    effective_per_page = int(per_page) if per_page is not None and int(per_page) > 0 else default_per_page
    return LogOptions(max_count=effective_per_page, skip=page_to_skip(page, effective_per_page))


__all__ = ["DEFAULT_PER_PAGE", "page_to_skip", "log_pagination_options"]
