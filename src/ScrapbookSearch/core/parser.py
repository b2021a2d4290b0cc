"""Query string parser.

Grammar
- Tokens are separated by whitespace. A double-quoted span keeps whitespace;
  ``""`` inside it stands for one literal quote.
- ``field:value`` filters a field. Leading dashes negate it when their count
  is odd, so ``-title:foo`` excludes and ``--title:foo`` includes.
- A term without a field goes to the default field (``tcc`` until changed by
  ``default:``). ``-term`` is a negated term for the default field.
- ``mc:``, ``re:`` and ``default:`` change how the *following* terms are
  parsed; terms already parsed keep their meaning.

Parsing never raises. Invalid regular expressions and dates are reported in
`Query.errors` and the offending term is dropped. Unknown commands are
reported in `Query.warnings` and otherwise ignored.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import tzinfo
from typing import Callable, Iterable, Iterator

from ScrapbookSearch.core.dates import (
    MAX_TIMESTAMP,
    MIN_TIMESTAMP,
    TIMESTAMP_WIDTH,
    date_utc_to_local,
)
from ScrapbookSearch.core.patterns import (
    DateRange,
    Pattern,
    PresencePattern,
    RegexPattern,
    compile_literal,
    compile_regex,
)
from ScrapbookSearch.core.query import (
    DEFAULT_FIELD,
    ROOT_ID,
    MatchKind,
    Query,
    RuleField,
    RulePredicate,
    Scope,
    SortKey,
)
from ScrapbookSearch.utils.i18n import Messages, get_messages

_QUOTED = r'"([^"]*(?:""[^"]*)*)"'
_TOKEN_RE = re.compile(
    rf'(-*[A-Za-z]+:|-+)(?:{_QUOTED}|([^"\s]*))'
    rf'|(?:{_QUOTED}|([^"\s]+))'
)
_DATE_RE = re.compile(rf"([0-9]{{0,{TIMESTAMP_WIDTH}}})(?:-([0-9]{{0,{TIMESTAMP_WIDTH}}}))?")
_EXACT_FIELDS = frozenset({RuleField.ID, RuleField.TYPE})


@dataclass(frozen=True, slots=True)
class Token:
    """One parsed token.

    Attributes:
        command: Field or command name, "" for a term without a field.
        term: Decoded value.
        positive: False when negated by an odd number of dashes.
    """

    command: str
    term: str
    positive: bool = True


def tokenize(query_str: str) -> Iterator[Token]:
    """Split a query string into tokens, left to right."""
    for match in _TOKEN_RE.finditer(query_str):
        prefix, quoted, plain, quoted_bare, plain_bare = match.groups()
        if prefix is not None:
            term = quoted.replace('""', '"') if quoted is not None else plain
            stripped = prefix.lstrip("-")
            dashes = len(prefix) - len(stripped)
            yield Token(command=stripped[:-1], term=term, positive=dashes % 2 == 0)
        else:
            term = quoted_bare.replace('""', '"') if quoted_bare is not None else plain_bare
            yield Token(command="", term=term)


@dataclass(slots=True)
class _ParseContext:
    """Mutable state threaded through token processing."""

    zone: tzinfo | None
    messages: Messages
    case_sensitive: bool = False
    use_regex: bool = False
    default_field: str = DEFAULT_FIELD
    rules: dict[RuleField, tuple[list[Pattern], list[Pattern]]] = field(default_factory=dict)
    sorts: list[SortKey] = field(default_factory=list)
    books: tuple[list[str], list[str]] = field(default_factory=lambda: ([], []))
    roots: tuple[list[str], list[str]] = field(default_factory=lambda: ([], []))
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def add_rule(self, rule_field: RuleField, positive: bool, pattern: Pattern | None) -> None:
        if pattern is None:
            return
        include, exclude = self.rules.setdefault(rule_field, ([], []))
        (include if positive else exclude).append(pattern)

    def parse_str(self, term: str, *, exact: bool = False) -> RegexPattern | None:
        if self.use_regex:
            try:
                return compile_regex(term, case_sensitive=self.case_sensitive)
            except re.error:
                self.errors.append(self.messages.t("invalid_regexp", term))
                return None
        return compile_literal(term, case_sensitive=self.case_sensitive, exact=exact)

    def parse_date(self, term: str) -> DateRange | None:
        match = _DATE_RE.fullmatch(term)
        if not match:
            self.errors.append(self.messages.t("invalid_date", term))
            return None
        since, until = match.groups()
        return DateRange(
            since=self._to_local(since) if since else MIN_TIMESTAMP,
            until=self._to_local(until) if until else MAX_TIMESTAMP,
        )

    def _to_local(self, digits: str) -> str:
        return date_utc_to_local(digits.ljust(TIMESTAMP_WIDTH, "0"), self.zone)

    def freeze(self) -> Query:
        return Query(
            rules={
                name: RulePredicate(include=tuple(include), exclude=tuple(exclude))
                for name, (include, exclude) in self.rules.items()
            },
            sorts=tuple(self.sorts),
            book_scope=Scope(include=tuple(self.books[0]), exclude=tuple(self.books[1])),
            root_scope=Scope(include=tuple(self.roots[0]), exclude=tuple(self.roots[1])),
            case_sensitive=self.case_sensitive,
            use_regex=self.use_regex,
            default_field=self.default_field,
            errors=tuple(self.errors),
            warnings=tuple(self.warnings),
        )


def _set_default(ctx: _ParseContext, token: Token) -> None:
    ctx.default_field = token.term


def _set_match_case(ctx: _ParseContext, token: Token) -> None:
    ctx.case_sensitive = token.positive


def _set_regex(ctx: _ParseContext, token: Token) -> None:
    ctx.use_regex = token.positive


def _add_book(ctx: _ParseContext, token: Token) -> None:
    ctx.books[0 if token.positive else 1].append(token.term)


def _add_root(ctx: _ParseContext, token: Token) -> None:
    ctx.roots[0 if token.positive else 1].append(token.term)


def _add_sort(ctx: _ParseContext, token: Token) -> None:
    ctx.sorts.append(SortKey.from_term(token.term, 1 if token.positive else -1))


_COMMANDS: dict[str, Callable[[_ParseContext, Token], None]] = {
    "default": _set_default,
    "mc": _set_match_case,
    "re": _set_regex,
    "book": _add_book,
    "root": _add_root,
    "sort": _add_sort,
}


def _add_field_rule(ctx: _ParseContext, rule_field: RuleField, token: Token) -> None:
    kind = rule_field.kind
    if kind is MatchKind.DATE:
        pattern: Pattern | None = ctx.parse_date(token.term)
    elif kind is MatchKind.BOOL:
        pattern = PresencePattern()
    else:
        pattern = ctx.parse_str(token.term, exact=rule_field in _EXACT_FIELDS)
    ctx.add_rule(rule_field, token.positive, pattern)


def parse_query(
    query_str: str,
    *,
    zone: tzinfo | None = None,
    messages: Messages | None = None,
) -> Query:
    """Parse a query string into an immutable `Query`.

    Args:
        query_str: Raw query text.
        zone: Local time zone for date filters, the system zone if None.
        messages: Catalog for error texts, English if None.

    Returns:
        Parsed query; check `Query.errors` before evaluating it.
    """
    ctx = _ParseContext(zone=zone, messages=messages or get_messages())
    for token in tokenize(query_str):
        command = token.command or ctx.default_field
        handler = _COMMANDS.get(command)
        if handler is not None:
            handler(ctx, token)
            continue
        try:
            rule_field = RuleField(command)
        except ValueError:
            ctx.warnings.append(ctx.messages.t("unknown_command", command))
            continue
        _add_field_rule(ctx, rule_field, token)
    return ctx.freeze()


def quote_term(value: str) -> str:
    """Quote a value for use in a query string."""
    return '"' + value.replace('"', '""') + '"'


def compose_query(
    keywords: str,
    *,
    default_search: str = "",
    books: Iterable[str] = (),
    roots: Iterable[str] = (),
) -> str:
    """Build the effective query string from search form inputs.

    Selected books come first, then the default search (extended with root
    filters when any requested root is not the whole book), then the user
    keywords.
    """
    roots = list(roots)
    prefix = default_search
    if any(root != ROOT_ID for root in roots):
        prefix += " " + " ".join(f"root:{quote_term(root)}" for root in roots)

    query_str = keywords
    if prefix:
        query_str = f"{prefix} {query_str}"
    book_terms = " ".join(f"book:{quote_term(book)}" for book in books)
    if book_terms:
        query_str = f"{book_terms} {query_str}"
    return query_str
