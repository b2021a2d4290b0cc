"""Command implementations for ScrapbookSearch CLI.

Encapsulates search business logic, separated from CLI parameter handling
and output formatting.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Sequence

from ScrapbookSearch.config import AppConfig
from ScrapbookSearch.core.dates import local_zone
from ScrapbookSearch.core.parser import compose_query, parse_query
from ScrapbookSearch.core.query import InvalidQueryError, Query
from ScrapbookSearch.renderers import OutputWriter
from ScrapbookSearch.renderers.mapper import map_book_result
from ScrapbookSearch.services import SearchableBook, create_search_service, select_books
from ScrapbookSearch.utils.i18n import get_messages
from ScrapbookSearch.utils.log import log

BookLoader = Callable[[AppConfig, Sequence[str]], Sequence[SearchableBook]]


@dataclass(slots=True)
class SearchCommand:
    """Run one search over the configured books.

    Builds the effective query from the keywords, selected books and roots,
    refuses invalid queries, loads only the books in scope and hands each
    book's result to the output writer.
    """

    config: AppConfig
    output_writer: OutputWriter
    load_books: BookLoader
    keywords: str = ""
    books: Sequence[str] = ()
    roots: Sequence[str] = ()
    query_str: str = field(init=False, default="")

    def build_query(self) -> Query:
        """Compose and parse the query, logging every parse error.

        Raises:
            InvalidQueryError: If the query has parse errors.
        """
        messages = get_messages(self.config.runtime.lang)
        self.query_str = compose_query(
            self.keywords,
            default_search=self.config.search.default_query,
            books=self.books,
            roots=self.roots,
        )
        query = parse_query(
            self.query_str,
            zone=local_zone(self.config.runtime.timezone),
            messages=messages,
        )
        if query.errors:
            for error in query.errors:
                log.error(messages.t("search_error", error))
            raise InvalidQueryError(query.errors)
        log.debug("Parsed query: %s", query)
        return query

    def execute(self) -> None:
        query = self.build_query()
        log.info("Search: %s", self.query_str.strip())

        names = [book.name for book in select_books(self.config.library.searchable, query.book_scope)]
        if not names:
            log.warning("No book matches the book filters")
            return

        service = create_search_service(self.config, self.load_books(self.config, names))
        for result in service.search(query):
            self.output_writer.write_book_result(map_book_result(result), self.query_str)


@dataclass(slots=True)
class BooksCommand:
    """List configured books."""

    config: AppConfig

    def execute(self) -> None:
        for book in self.config.library.books:
            suffix = " (no tree)" if book.no_tree else ""
            log.info("%s: %s -> %s%s", book.id or "(default)", book.name, book.tree_dir, suffix)
