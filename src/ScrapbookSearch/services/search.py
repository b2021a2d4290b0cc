"""Search service evaluating a parsed query across books."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Protocol, Sequence

from ScrapbookSearch.core.matcher import matches
from ScrapbookSearch.core.models import FulltextSegment, ItemMeta, Record
from ScrapbookSearch.core.query import InvalidQueryError, Query, Scope
from ScrapbookSearch.core.roots import resolve_roots
from ScrapbookSearch.core.sorter import sort_results
from ScrapbookSearch.utils.log import log


class SearchableBook(Protocol):
    """What the service needs from a loaded book."""

    id: str
    name: str
    meta: dict[str, ItemMeta | None]
    fulltext: dict[str, dict[str, FulltextSegment]]

    def get_reachable_items(self, root: str) -> Iterable[str]:
        """Return ids reachable from `root`, including it."""
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class BookResult:
    """Ordered matches of one book."""

    book_id: str
    book_name: str
    records: Sequence[Record]


def select_books(books: Iterable[SearchableBook], scope: Scope) -> list[SearchableBook]:
    """Filter books by name: keep included ones (all if none), drop excluded ones."""
    selected = list(books)
    if scope.include:
        selected = [book for book in selected if book.name in scope.include]
    return [book for book in selected if book.name not in scope.exclude]


def item_records(
    item_id: str,
    meta: ItemMeta | None,
    segments: dict[str, FulltextSegment] | None,
    *,
    frame_records: bool = True,
) -> Iterator[Record]:
    """Build the records of one item.

    An item without fulltext yields one record with an empty file key. With
    `frame_records` every fulltext file yields its own record; otherwise all
    files are folded into one record keyed by the first file.
    """
    if not segments:
        yield Record(id=item_id, file="", meta=meta)
        return
    if frame_records:
        for file, segment in segments.items():
            yield Record(id=item_id, file=file, meta=meta, fulltext=segment)
        return
    first = next(iter(segments))
    content = "\n".join(segment.content for segment in segments.values())
    yield Record(id=item_id, file=first, meta=meta, fulltext=FulltextSegment(content=content))


@dataclass(slots=True)
class LibrarySearchService:
    """Search service over a fixed set of loaded books."""

    books: Sequence[SearchableBook]
    frame_records: bool = True

    def search(self, query: Query) -> list[BookResult]:
        """Evaluate a query on every book in its book scope.

        Args:
            query: Parsed query.

        Returns:
            One result per selected book, in configured book order.

        Raises:
            InvalidQueryError: If the query has parse errors.
        """
        if query.errors:
            raise InvalidQueryError(query.errors)
        for warning in query.warnings:
            log.warning(warning)

        results: list[BookResult] = []
        for book in select_books(self.books, query.book_scope):
            result = self.search_book(query, book)
            log.info("Search book completed: book=%s count=%d", book.name, len(result.records))
            results.append(result)
        return results

    def search_book(self, query: Query, book: SearchableBook) -> BookResult:
        """Evaluate a query on one book."""
        if query.errors:
            raise InvalidQueryError(query.errors)
        matched: list[Record] = []
        for item_id in resolve_roots(query.root_scope, book.get_reachable_items):
            records = item_records(
                item_id,
                book.meta.get(item_id),
                book.fulltext.get(item_id),
                frame_records=self.frame_records,
            )
            matched.extend(record for record in records if matches(query, record))
        log.debug("Matched %d records in book %s before sorting", len(matched), book.name)
        return BookResult(
            book_id=book.id,
            book_name=book.name,
            records=tuple(sort_results(matched, query.sorts)),
        )
