from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Sequence

from ScrapbookSearch.core.patterns import Pattern

DEFAULT_FIELD = "tcc"
ROOT_ID = "root"


class MatchKind(Enum):
    """How the patterns of one rule are combined against a value."""

    TEXT = "text"  # AND across includes
    TEXT_OR = "text_or"  # OR across includes
    BOOL = "bool"
    DATE = "date"


class RuleField(str, Enum):
    """Fields a query can filter on."""

    ID = "id"
    TYPE = "type"
    FILE = "file"
    SOURCE = "source"
    ICON = "icon"
    TCC = "tcc"
    TITLE = "title"
    COMMENT = "comment"
    CONTENT = "content"
    CREATE = "create"
    MODIFY = "modify"
    MARKED = "marked"
    LOCKED = "locked"

    @property
    def kind(self) -> MatchKind:
        return _FIELD_KINDS[self]


_FIELD_KINDS: Mapping[RuleField, MatchKind] = MappingProxyType(
    {
        RuleField.ID: MatchKind.TEXT_OR,
        RuleField.TYPE: MatchKind.TEXT_OR,
        RuleField.FILE: MatchKind.TEXT,
        RuleField.SOURCE: MatchKind.TEXT,
        RuleField.ICON: MatchKind.TEXT,
        RuleField.TCC: MatchKind.TEXT,
        RuleField.TITLE: MatchKind.TEXT,
        RuleField.COMMENT: MatchKind.TEXT,
        RuleField.CONTENT: MatchKind.TEXT,
        RuleField.CREATE: MatchKind.DATE,
        RuleField.MODIFY: MatchKind.DATE,
        RuleField.MARKED: MatchKind.BOOL,
        RuleField.LOCKED: MatchKind.BOOL,
    }
)


class SortField(Enum):
    """Where a sort key reads its value from."""

    ID = "id"
    FILE = "file"
    CONTENT = "content"
    META = "meta"


@dataclass(frozen=True, slots=True)
class SortKey:
    """One sort criterion.

    Attributes:
        field: Value source.
        subfield: Metadata key when `field` is META, otherwise empty.
        order: 1 for ascending, -1 for descending.
    """

    field: SortField
    subfield: str = ""
    order: int = 1

    @classmethod
    def from_term(cls, term: str, order: int) -> "SortKey":
        if term == "id":
            return cls(SortField.ID, order=order)
        if term == "file":
            return cls(SortField.FILE, order=order)
        if term == "content":
            return cls(SortField.CONTENT, order=order)
        return cls(SortField.META, subfield=term, order=order)


@dataclass(frozen=True, slots=True)
class RulePredicate:
    """Include and exclude patterns of one field."""

    include: Sequence[Pattern] = ()
    exclude: Sequence[Pattern] = ()


@dataclass(frozen=True, slots=True)
class Scope:
    """Literal include/exclude specifiers (book names or root ids)."""

    include: Sequence[str] = ()
    exclude: Sequence[str] = ()


@dataclass(frozen=True, slots=True)
class Query:
    """Parsed, immutable intent of one search.

    A query with a non-empty `errors` is invalid and must not be evaluated.

    Attributes:
        rules: Mapping of field to its predicate.
        sorts: Sort keys, primary first.
        book_scope: Book names to include/exclude.
        root_scope: Root ids to include/exclude.
        case_sensitive: Case-sensitivity flag at the end of parsing.
        use_regex: Regex-mode flag at the end of parsing.
        default_field: Default field at the end of parsing.
        errors: Human-readable parse errors.
        warnings: Human-readable notices about ignored commands.
    """

    rules: Mapping[RuleField, RulePredicate] = field(default_factory=dict)
    sorts: Sequence[SortKey] = ()
    book_scope: Scope = Scope()
    root_scope: Scope = Scope()
    case_sensitive: bool = False
    use_regex: bool = False
    default_field: str = DEFAULT_FIELD
    errors: Sequence[str] = ()
    warnings: Sequence[str] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "rules", MappingProxyType(dict(self.rules)))

    @property
    def is_valid(self) -> bool:
        return not self.errors


class InvalidQueryError(ValueError):
    """Raised when evaluation of a query with parse errors is attempted."""

    def __init__(self, errors: Sequence[str]) -> None:
        super().__init__("; ".join(errors))
        self.errors = tuple(errors)
