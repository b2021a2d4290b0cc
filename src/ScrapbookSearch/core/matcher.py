"""Evaluation of query rules against records."""

from __future__ import annotations

from typing import Any, Callable, Mapping

from ScrapbookSearch.core.models import ItemMeta, Record
from ScrapbookSearch.core.patterns import DateRange, RegexPattern
from ScrapbookSearch.core.query import MatchKind, Query, RuleField, RulePredicate


def match_text(rule: RulePredicate, text: str | None) -> bool:
    """Pass if no exclude pattern and every include pattern matches."""
    text = text or ""
    if any(_test(pattern, text) for pattern in rule.exclude):
        return False
    return all(_test(pattern, text) for pattern in rule.include)


def match_text_or(rule: RulePredicate, text: str | None) -> bool:
    """Pass if no exclude pattern and any include pattern matches (or none exist)."""
    text = text or ""
    if any(_test(pattern, text) for pattern in rule.exclude):
        return False
    if not rule.include:
        return True
    return any(_test(pattern, text) for pattern in rule.include)


def match_bool(rule: RulePredicate, flag: bool) -> bool:
    if rule.exclude and flag:
        return False
    if rule.include and not flag:
        return False
    return True


def match_date(rule: RulePredicate, date: str | None) -> bool:
    if not date:
        return False
    if any(_contains(pattern, date) for pattern in rule.exclude):
        return False
    return all(_contains(pattern, date) for pattern in rule.include)


def _test(pattern: Any, text: str) -> bool:
    if not isinstance(pattern, RegexPattern):
        raise TypeError(f"Expected a regex pattern, got {type(pattern).__name__}")
    return pattern.test(text)


def _contains(pattern: Any, date: str) -> bool:
    if not isinstance(pattern, DateRange):
        raise TypeError(f"Expected a date range, got {type(pattern).__name__}")
    return pattern.contains(date)


def _tcc(record: Record, meta: ItemMeta) -> str:
    return "\n".join((meta.title, meta.comment, record.fulltext.content or ""))


_FIELD_VALUES: Mapping[RuleField, Callable[[Record, ItemMeta], Any]] = {
    RuleField.TCC: _tcc,
    RuleField.CONTENT: lambda record, meta: record.fulltext.content,
    RuleField.ID: lambda record, meta: record.id,
    RuleField.FILE: lambda record, meta: record.file,
    RuleField.TITLE: lambda record, meta: meta.title,
    RuleField.COMMENT: lambda record, meta: meta.comment,
    RuleField.SOURCE: lambda record, meta: meta.source,
    RuleField.ICON: lambda record, meta: meta.icon,
    RuleField.TYPE: lambda record, meta: meta.type,
    RuleField.CREATE: lambda record, meta: meta.create,
    RuleField.MODIFY: lambda record, meta: meta.modify,
    RuleField.MARKED: lambda record, meta: meta.marked,
    RuleField.LOCKED: lambda record, meta: meta.locked,
}

_MATCHERS: Mapping[MatchKind, Callable[[RulePredicate, Any], bool]] = {
    MatchKind.TEXT: match_text,
    MatchKind.TEXT_OR: match_text_or,
    MatchKind.BOOL: match_bool,
    MatchKind.DATE: match_date,
}


def match_rule(rule_field: RuleField, rule: RulePredicate, record: Record) -> bool:
    """Evaluate the rule of one field against a record with metadata."""
    if record.meta is None:
        return False
    value = _FIELD_VALUES[rule_field](record, record.meta)
    return _MATCHERS[rule_field.kind](rule, value)


def matches(query: Query, record: Record) -> bool:
    """Return whether a record satisfies every rule of the query.

    Records without metadata never match.
    """
    if record.meta is None:
        return False
    return all(match_rule(rule_field, rule, record) for rule_field, rule in query.rules.items())
