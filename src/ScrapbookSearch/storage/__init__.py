"""Storage layer for ScrapbookSearch.

Loads book indexes from their tree directories and provides the factory used
by the CLI.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from ScrapbookSearch.config import AppConfig
from ScrapbookSearch.storage.tree import Book, load_book
from ScrapbookSearch.utils.i18n import get_messages
from ScrapbookSearch.utils.log import log


def load_books(config: AppConfig, names: Iterable[str] | None = None) -> list[Book]:
    """Load configured searchable books.

    Args:
        config: Application configuration.
        names: Only load books with these names; all searchable books if None.

    Returns:
        Loaded books in configured order.
    """
    wanted = set(names) if names is not None else None
    messages = get_messages(config.runtime.lang)
    books: list[Book] = []
    for book_config in config.library.searchable:
        if wanted is not None and book_config.name not in wanted:
            continue
        log.info("Loading book: %s", book_config.name)
        books.append(
            load_book(
                book_config.id,
                book_config.name,
                Path(book_config.tree_dir),
                update_threshold=config.search.cache_update_threshold,
                size_limit=config.search.fulltext_size_limit,
                messages=messages,
            )
        )
    return books


__all__ = ["Book", "load_book", "load_books"]
