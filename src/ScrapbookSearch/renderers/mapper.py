"""Mapper from search results to display view models."""

from __future__ import annotations

from ScrapbookSearch.core.models import ItemMeta, Record
from ScrapbookSearch.renderers.view_models import BookResultView, ResultView
from ScrapbookSearch.services.search import BookResult


def map_record_to_view(record: Record) -> ResultView:
    """Convert one record to a view; records without metadata get blank fields."""
    meta = record.meta or ItemMeta()
    return ResultView(
        id=record.id,
        file=record.file,
        title=meta.title or record.id,
        type=meta.type,
        source=meta.source,
        create=meta.create,
        modify=meta.modify,
        marked=meta.marked,
        locked=meta.locked,
    )


def map_book_result(result: BookResult) -> BookResultView:
    return BookResultView(
        book_id=result.book_id,
        book_name=result.book_name,
        results=tuple(map_record_to_view(record) for record in result.records),
    )
