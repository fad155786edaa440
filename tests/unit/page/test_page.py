"""Tests for page handles resolved through a ``Wiki``."""

from __future__ import annotations

import unittest
from unittest import mock

from wikitree import Wiki
from wikitree.errors import VersionNotFoundError
from wikitree.page import Page
from wikitree.page_names import PageFormat
from wikitree.version_store import Blob, MemoryVersionStore


class _RecordingRenderer:
    def __init__(self) -> None:
        self.calls: list[tuple[str, PageFormat | None, str]] = []

    def render(self, text: str, page_format: PageFormat | None, name: str) -> str:
        self.calls.append((text, page_format, name))
        return f"<p>{text}</p>"


def _wiki(store: MemoryVersionStore, renderer: _RecordingRenderer | None = None) -> Wiki:
    return Wiki(store, renderer=renderer or _RecordingRenderer(), default_version="master", per_page=30)


class WikiPageLookupTests(unittest.TestCase):
    def test_page_binds_blob_path_and_version(self) -> None:
        store = MemoryVersionStore()
        commit = store.add_commit("master", {"docs": {"Home.md": "# Welcome\n"}}, message="init")
        wiki = _wiki(store)

        page = wiki.page("Home")

        assert page is not None
        self.assertEqual(page.name, "Home.md")
        self.assertEqual(page.path, "docs/Home.md")
        self.assertEqual(page.directory, "docs")
        self.assertEqual(page.filename_stem, "Home")
        self.assertEqual(page.raw_data, b"# Welcome\n")
        self.assertEqual(page.text, "# Welcome\n")
        self.assertIs(page.format, PageFormat.MARKDOWN)
        self.assertEqual(page.format_name, "Markdown")
        self.assertEqual(page.version, commit)

    def test_page_at_root_has_empty_directory(self) -> None:
        store = MemoryVersionStore()
        store.add_commit("master", {"Home.rst": "Home\n===="})

        page = _wiki(store).page("Home")

        assert page is not None
        self.assertEqual(page.directory, "")
        self.assertIs(page.format, PageFormat.REST)

    def test_page_resolves_at_requested_version(self) -> None:
        store = MemoryVersionStore()
        first = store.add_commit("master", {"Home.md": "v1"})
        store.add_commit("master", {"Home.md": "v2"})
        wiki = _wiki(store)

        old = wiki.page("Home", first.id)
        current = wiki.page("Home")

        assert old is not None and current is not None
        self.assertEqual(old.raw_data, b"v1")
        self.assertEqual(old.version, first)
        self.assertEqual(current.raw_data, b"v2")

    def test_missing_page_returns_none(self) -> None:
        store = MemoryVersionStore()
        store.add_commit("master", {"Home.md": "x"})

        self.assertIsNone(_wiki(store).page("Missing"))

    def test_page_added_later_is_absent_at_earlier_version(self) -> None:
        store = MemoryVersionStore()
        first = store.add_commit("master", {"Home.md": "x"})
        store.add_commit("master", {"Home.md": "x", "New.md": "y"})
        wiki = _wiki(store)

        self.assertIsNone(wiki.page("New", first.id))
        self.assertIsNotNone(wiki.page("New"))

    def test_unknown_version_raises(self) -> None:
        store = MemoryVersionStore()
        store.add_commit("master", {"Home.md": "x"})

        with self.assertRaises(VersionNotFoundError) as ctx:
            _wiki(store).page("Home", "no-such-branch")
        self.assertEqual(ctx.exception.version, "no-such-branch")

    def test_wiki_page_class_is_used_for_handles(self) -> None:
        class CustomPage(Page):
            pass

        store = MemoryVersionStore()
        store.add_commit("master", {"Home.md": "x"})
        wiki = _wiki(store)
        wiki.page_class = CustomPage

        self.assertIsInstance(wiki.page("Home"), CustomPage)


class PageRenderingTests(unittest.TestCase):
    def test_formatted_data_renders_once_with_detected_format(self) -> None:
        store = MemoryVersionStore()
        store.add_commit("master", {"Guide.textile": "h1. Guide"})
        renderer = _RecordingRenderer()
        page = _wiki(store, renderer).page("Guide")

        assert page is not None
        first = page.formatted_data
        second = page.formatted_data

        self.assertEqual(first, "<p>h1. Guide</p>")
        self.assertEqual(second, first)
        self.assertEqual(renderer.calls, [("h1. Guide", PageFormat.TEXTILE, "Guide.textile")])

    def test_unpopulated_page_accessors_return_none(self) -> None:
        store = MemoryVersionStore()
        page = Page(_wiki(store))

        self.assertIsNone(page.name)
        self.assertIsNone(page.path)
        self.assertIsNone(page.directory)
        self.assertIsNone(page.raw_data)
        self.assertIsNone(page.format)
        self.assertIsNone(page.formatted_data)
        self.assertIsNone(page.version)


class PageLifecycleTests(unittest.TestCase):
    def test_populate_twice_raises(self) -> None:
        page = Page(_wiki(MemoryVersionStore()))
        page.populate(Blob(id="a", name="Home.md"), "Home.md")

        with self.assertRaises(ValueError):
            page.populate(Blob(id="b", name="Other.md"), "Other.md")

    def test_populate_rejects_path_not_ending_with_blob_name(self) -> None:
        page = Page(_wiki(MemoryVersionStore()))

        with self.assertRaises(ValueError):
            page.populate(Blob(id="a", name="Home.md"), "docs/Other.md")

    def test_version_can_only_be_set_once(self) -> None:
        store = MemoryVersionStore()
        first = store.add_commit("master", {"Home.md": "x"})
        second = store.add_commit("master", {"Home.md": "y"})
        page = _wiki(store).page("Home", first.id)

        assert page is not None
        with self.assertRaises(ValueError):
            page.version = second
        self.assertEqual(page.version, first)

    def test_find_in_tree_leaves_version_unset(self) -> None:
        store = MemoryVersionStore()
        commit = store.add_commit("master", {"docs": {"Home.md": "x"}})
        page = Page(_wiki(store)).find_in_tree(store.tree_of(commit), "Home")

        assert page is not None
        self.assertEqual(page.path, "docs/Home.md")
        self.assertIsNone(page.version)


class PageVersionsTests(unittest.TestCase):
    def _history_store(self) -> tuple[MemoryVersionStore, list]:
        store = MemoryVersionStore()
        commits = [
            store.add_commit("master", {"Home.md": "1"}, message="one"),
            store.add_commit("master", {"Home.md": "1", "Other.md": "o"}, message="unrelated"),
            store.add_commit("master", {"Home.md": "2", "Other.md": "o"}, message="two"),
            store.add_commit("master", {"Home.md": "3", "Other.md": "o"}, message="three"),
        ]
        return store, commits

    def test_versions_lists_commits_touching_page_newest_first(self) -> None:
        store, commits = self._history_store()
        page = _wiki(store).page("Home")

        assert page is not None
        self.assertEqual([commit.message for commit in page.versions()], ["three", "two", "one"])

    def test_versions_paginates(self) -> None:
        store, _commits = self._history_store()
        page = _wiki(store).page("Home")

        assert page is not None
        self.assertEqual([c.message for c in page.versions(page=1, per_page=2)], ["three", "two"])
        self.assertEqual([c.message for c in page.versions(page=2, per_page=2)], ["one"])
        self.assertEqual(page.versions(page=3, per_page=2), [])

    def test_versions_start_at_bound_version(self) -> None:
        store, commits = self._history_store()
        page = _wiki(store).page("Home", commits[2].id)

        assert page is not None
        self.assertEqual([c.message for c in page.versions()], ["two", "one"])

    def test_versions_pass_pagination_window_to_store(self) -> None:
        store, _commits = self._history_store()
        page = _wiki(store).page("Home")

        assert page is not None
        with mock.patch.object(store, "log", return_value=[]) as log:
            page.versions(page=3, per_page=5)

        version, path, options = log.call_args.args
        self.assertEqual(version, page.version.id)
        self.assertEqual(path, "Home.md")
        self.assertEqual((options.max_count, options.skip), (5, 10))

    def test_versions_on_unresolved_page_raises(self) -> None:
        page = Page(_wiki(MemoryVersionStore()))

        with self.assertRaises(ValueError):
            page.versions()


if __name__ == "__main__":
    unittest.main()
