from __future__ import annotations

from typing import Any, Iterable, Sequence

from ScrapbookSearch.core.models import Record
from ScrapbookSearch.core.query import SortField, SortKey


def sort_value(record: Record, key: SortKey) -> str:
    """Resolve the comparable value of a record for one sort key.

    Missing or falsy values compare as the empty string and set flags as "1".
    """
    value: Any
    if key.field is SortField.ID:
        value = record.id
    elif key.field is SortField.FILE:
        value = record.file
    elif key.field is SortField.CONTENT:
        value = record.fulltext.content
    else:
        value = record.meta.get(key.subfield) if record.meta is not None else None
    if isinstance(value, bool):
        return "1" if value else ""
    if not value:
        return ""
    return value if isinstance(value, str) else str(value)


def sort_results(results: Iterable[Record], sort_keys: Sequence[SortKey]) -> list[Record]:
    """Stable multi-key sort, first key primary.

    Sorting by the least significant key first keeps earlier keys dominant
    because each pass is stable, including descending passes.
    """
    ordered = list(results)
    for key in reversed(sort_keys):
        ordered.sort(key=lambda record, key=key: sort_value(record, key), reverse=key.order < 0)
    return ordered
