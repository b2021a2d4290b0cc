"""Tests for rule evaluation against records."""

import sys
import unittest
from pathlib import Path

from dateutil import tz

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from ScrapbookSearch.core.matcher import match_bool, match_date, match_text, match_text_or, matches
from ScrapbookSearch.core.models import FulltextSegment, ItemMeta, Record
from ScrapbookSearch.core.parser import parse_query
from ScrapbookSearch.core.patterns import DateRange, PresencePattern, compile_literal
from ScrapbookSearch.core.query import RulePredicate


def _record(
    item_id: str = "item",
    *,
    content: str = "",
    file: str = "",
    **meta: object,
) -> Record:
    return Record(
        id=item_id,
        file=file,
        meta=ItemMeta(**meta),  # type: ignore[arg-type]
        fulltext=FulltextSegment(content=content),
    )


def _match(query_str: str, record: Record) -> bool:
    query = parse_query(query_str, zone=tz.UTC)
    assert not query.errors, query.errors
    return matches(query, record)


class TestMatchFunctions(unittest.TestCase):
    def test_match_text_requires_all_includes(self) -> None:
        rule = RulePredicate(
            include=(compile_literal("a", case_sensitive=False), compile_literal("b", case_sensitive=False))
        )
        self.assertTrue(match_text(rule, "ab"))
        self.assertFalse(match_text(rule, "a"))
        self.assertFalse(match_text(rule, None))

    def test_match_text_or_passes_without_includes(self) -> None:
        rule = RulePredicate(exclude=(compile_literal("x", case_sensitive=False, exact=True),))
        self.assertTrue(match_text_or(rule, "y"))
        self.assertTrue(match_text_or(rule, None))
        self.assertFalse(match_text_or(rule, "x"))

    def test_match_bool(self) -> None:
        self.assertTrue(match_bool(RulePredicate(include=(PresencePattern(),)), True))
        self.assertFalse(match_bool(RulePredicate(include=(PresencePattern(),)), False))
        self.assertFalse(match_bool(RulePredicate(exclude=(PresencePattern(),)), True))
        self.assertTrue(match_bool(RulePredicate(), False))

    def test_match_date_bounds_are_inclusive(self) -> None:
        rule = RulePredicate(include=(DateRange("20200101000000000", "20201231000000000"),))
        self.assertTrue(match_date(rule, "20200101000000000"))
        self.assertTrue(match_date(rule, "20201231000000000"))
        self.assertFalse(match_date(rule, "20201231000000001"))
        self.assertFalse(match_date(rule, ""))


class TestMatches(unittest.TestCase):
    def test_record_without_meta_never_matches(self) -> None:
        record = Record(id="a", file="", meta=None)
        self.assertFalse(matches(parse_query(""), record))

    def test_empty_query_matches_any_record_with_meta(self) -> None:
        self.assertTrue(_match("", _record()))

    def test_type_is_exact_but_tcc_is_substring(self) -> None:
        self.assertFalse(_match("type:foo", _record(type="foobar")))
        self.assertTrue(_match('type:"Foo"', _record(type="foo")))
        self.assertTrue(_match("tcc:foo", _record(title="foobar")))

    def test_repeated_id_is_or(self) -> None:
        for item_id, expected in (("a", True), ("b", True), ("c", False), ("ab", False)):
            with self.subTest(item_id=item_id):
                self.assertEqual(_match("id:a id:b", _record(item_id)), expected)

    def test_repeated_title_is_and(self) -> None:
        self.assertTrue(_match("title:a title:b", _record(title="ba")))
        self.assertFalse(_match("title:a title:b", _record(title="a")))

    def test_excluded_id(self) -> None:
        self.assertFalse(_match("-id:a", _record("a")))
        self.assertTrue(_match("-id:a", _record("b")))

    def test_case_sensitivity_follows_flag_position(self) -> None:
        query = "title:ABC mc:1 title:abc"
        self.assertTrue(_match(query, _record(title="abc")))
        self.assertFalse(_match(query, _record(title="ABC")))

    def test_tcc_joins_title_comment_and_content(self) -> None:
        record = _record(title="x", comment="y", content="z")
        self.assertTrue(_match(r"re: x\ny\nz", record))
        self.assertTrue(_match("z", record))
        self.assertFalse(_match("-y", record))

    def test_regex_is_multiline(self) -> None:
        self.assertTrue(_match("re: content:^bar$", _record(content="foo\nbar\nbaz")))

    def test_missing_content_is_empty(self) -> None:
        record = Record(id="a", file="", meta=ItemMeta())
        self.assertTrue(_match("-content:foo", record))
        self.assertFalse(_match("content:foo", record))

    def test_file_source_icon_and_comment(self) -> None:
        record = _record(file="frame1.html", source="https://example.com/page", icon="favicon.ico", comment="note")
        self.assertTrue(_match("file:frame source:example.com icon:.ico comment:not", record))
        self.assertFalse(_match("-file:frame", record))

    def test_presence_flags(self) -> None:
        self.assertTrue(_match("marked:", _record(marked=True)))
        self.assertFalse(_match("marked:", _record(marked=False)))
        self.assertFalse(_match("-locked:", _record(locked=True)))
        self.assertTrue(_match("-locked:", _record(locked=False)))

    def test_create_range(self) -> None:
        query = "create:20200101-20201231"
        self.assertTrue(_match(query, _record(create="20200615093000000")))
        self.assertTrue(_match(query, _record(create="20200101000000000")))
        self.assertFalse(_match(query, _record(create="20191231235959999")))
        self.assertFalse(_match(query, _record(create="20210101000000000")))
        self.assertFalse(_match(query, _record(create="")))

    def test_excluded_modify_range(self) -> None:
        self.assertTrue(_match("-modify:2020-", _record(modify="20191231000000000")))
        self.assertFalse(_match("-modify:2020-", _record(modify="20210101000000000")))

    def test_every_rule_must_pass(self) -> None:
        record = _record(title="alpha", type="note")
        self.assertTrue(_match("title:alp type:note", record))
        self.assertFalse(_match("title:alp type:folder", record))


if __name__ == "__main__":
    unittest.main()
