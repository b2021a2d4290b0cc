"""Search service layer for ScrapbookSearch."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from ScrapbookSearch.services.search import (
    BookResult,
    LibrarySearchService,
    SearchableBook,
    item_records,
    select_books,
)

if TYPE_CHECKING:
    from ScrapbookSearch.config import AppConfig


def create_search_service(config: AppConfig, books: Sequence[SearchableBook]) -> LibrarySearchService:
    """Create a search service over loaded books.

    Args:
        config: Application configuration containing search settings.
        books: Loaded books.

    Returns:
        Configured LibrarySearchService instance.
    """
    return LibrarySearchService(books=tuple(books), frame_records=config.search.frame_records)


__all__ = [
    "BookResult",
    "LibrarySearchService",
    "SearchableBook",
    "create_search_service",
    "item_records",
    "select_books",
]
