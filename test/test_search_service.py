"""Tests for the multi-book search service."""

import sys
import unittest
from pathlib import Path

from dateutil import tz

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from ScrapbookSearch.core.models import FulltextSegment, ItemMeta
from ScrapbookSearch.core.parser import parse_query
from ScrapbookSearch.core.query import InvalidQueryError, Scope
from ScrapbookSearch.services.search import LibrarySearchService, item_records, select_books
from ScrapbookSearch.storage.tree import Book


def _book(book_id: str, name: str) -> Book:
    return Book(
        id=book_id,
        name=name,
        meta={
            "a": ItemMeta(title="Apple pie", create="20200301000000000"),
            "b": ItemMeta(title="Banana", type="note", marked=True),
            "c": ItemMeta(title="Cherry", comment="apple-free"),
            "sep": ItemMeta(type="separator"),
        },
        toc={"root": ["a", "sub", "sep", "ghost"], "sub": ["b", "c"]},
        fulltext={
            "a": {"index.html": FulltextSegment("a recipe"), "frame.html": FulltextSegment("crust")},
            "c": {"index.html": FulltextSegment("red fruit")},
        },
    )


def _search(query_str: str, *books: Book, frame_records: bool = True):
    service = LibrarySearchService(books=books or (_book("", "Main"),), frame_records=frame_records)
    return service.search(parse_query(query_str, zone=tz.UTC))


class TestItemRecords(unittest.TestCase):
    def test_item_without_fulltext_has_one_empty_record(self) -> None:
        records = list(item_records("x", ItemMeta(), None))
        self.assertEqual(len(records), 1)
        self.assertEqual(records[0].file, "")
        self.assertEqual(records[0].fulltext.content, "")

    def test_frames_become_separate_records(self) -> None:
        segments = {"index.html": FulltextSegment("main"), "frame.html": FulltextSegment("frame")}
        records = list(item_records("x", ItemMeta(), segments))
        self.assertEqual([r.file for r in records], ["index.html", "frame.html"])
        self.assertTrue(all(r.id == "x" for r in records))

    def test_frames_folded_when_disabled(self) -> None:
        segments = {"index.html": FulltextSegment("main"), "frame.html": FulltextSegment("frame")}
        records = list(item_records("x", ItemMeta(), segments, frame_records=False))
        self.assertEqual(len(records), 1)
        self.assertEqual(records[0].file, "index.html")
        self.assertEqual(records[0].fulltext.content, "main\nframe")


class TestSelectBooks(unittest.TestCase):
    def test_include_and_exclude_by_name(self) -> None:
        books = [_book("1", "One"), _book("2", "Two"), _book("3", "Three")]
        self.assertEqual([b.id for b in select_books(books, Scope())], ["1", "2", "3"])
        self.assertEqual([b.id for b in select_books(books, Scope(include=("Two", "One")))], ["1", "2"])
        self.assertEqual([b.id for b in select_books(books, Scope(exclude=("Two",)))], ["1", "3"])
        self.assertEqual([b.id for b in select_books(books, Scope(include=("Two",), exclude=("Two",)))], [])


class TestLibrarySearchService(unittest.TestCase):
    def test_invalid_query_is_refused(self) -> None:
        service = LibrarySearchService(books=(_book("", "Main"),))
        with self.assertRaises(InvalidQueryError) as ctx:
            service.search(parse_query("create:abc re: (", zone=tz.UTC))
        self.assertEqual(len(ctx.exception.errors), 2)

    def test_matches_per_record(self) -> None:
        (result,) = _search("apple")
        self.assertEqual([(r.id, r.file) for r in result.records], [("a", "index.html"), ("a", "frame.html"), ("c", "index.html")])

    def test_content_matches_only_its_frame(self) -> None:
        (result,) = _search("content:crust")
        self.assertEqual([(r.id, r.file) for r in result.records], [("a", "frame.html")])

    def test_folded_frames(self) -> None:
        (result,) = _search("content:crust", frame_records=False)
        self.assertEqual([(r.id, r.file) for r in result.records], [("a", "index.html")])

    def test_items_without_meta_are_skipped(self) -> None:
        (result,) = _search("")
        self.assertNotIn("root", [r.id for r in result.records])
        self.assertNotIn("ghost", [r.id for r in result.records])
        self.assertNotIn("sub", [r.id for r in result.records])

    def test_root_scope(self) -> None:
        (result,) = _search("root:sub -id:sub")
        self.assertEqual([r.id for r in result.records], ["b", "c"])
        (result,) = _search("-root:sub -type:separator")
        self.assertEqual(sorted({r.id for r in result.records}), ["a"])

    def test_sorting(self) -> None:
        (result,) = _search("-type:separator sort:-title", frame_records=False)
        self.assertEqual([r.id for r in result.records], ["c", "b", "a"])

    def test_book_scope(self) -> None:
        results = _search("book:Two -type:separator", _book("1", "One"), _book("2", "Two"))
        self.assertEqual([r.book_name for r in results], ["Two"])
        results = _search("-book:Two", _book("1", "One"), _book("2", "Two"))
        self.assertEqual([r.book_id for r in results], ["1"])

    def test_unknown_commands_are_logged(self) -> None:
        with self.assertLogs("ScrapbookSearch", level="WARNING") as logs:
            _search("bogus:1")
        self.assertIn("Unknown command ignored: bogus", logs.output[0])


if __name__ == "__main__":
    unittest.main()
