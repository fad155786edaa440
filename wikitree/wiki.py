"""Wiki facade tying a version store to page lookup and rendering."""

from __future__ import annotations

from pathlib import Path

from .config import load_default_version, load_git_timeout_seconds, load_per_page, load_render_style
from .log import get_logger
from .markup import MarkupRenderer, PygmentsMarkupRenderer
from .page import Page
from .version_store import GitVersionStore, VersionStore

logger = get_logger(__name__)


class Wiki:
    """Pages stored as markup files anywhere in a versioned tree.

    ``default_version`` and ``per_page`` fall back to the user config when
    not given; so does the render style of the default renderer.
    """

    page_class: type[Page] = Page

    def __init__(
        self,
        store: VersionStore,
        *,
        renderer: MarkupRenderer | None = None,
        default_version: str | None = None,
        per_page: int | None = None,
    ) -> None:
        self.store = store
        self.renderer = renderer if renderer is not None else PygmentsMarkupRenderer(load_render_style())
        self.default_version = default_version or load_default_version()
        self.per_page = per_page if per_page is not None and per_page > 0 else load_per_page()

    @classmethod
    def from_repo(cls, repo_path: Path | str, **kwargs) -> Wiki:
        """Open the git repository at ``repo_path`` as a wiki."""
        store = GitVersionStore(repo_path, timeout_seconds=load_git_timeout_seconds())
        return cls(store, **kwargs)

    def __repr__(self) -> str:
        return f"<Wiki store={self.store!r} default_version={self.default_version!r}>"

    def page(self, name: str, version: str | None = None) -> Page | None:
        """Find page ``name`` at ``version`` (default: ``default_version``).

        Returns ``None`` when no file matches. Raises ``VersionNotFoundError``
        for an unknown version and ``StoreReadError`` when the store fails.
        """
        target_version = version or self.default_version
        logger.debug("looking up page %r at %s", name, target_version)
        return self.page_class(self).find(name, target_version)


__all__ = ["Wiki"]
