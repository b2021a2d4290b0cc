"""Library domain configuration: the books available for searching."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ScrapbookSearch.config.common import (
    expect_bool,
    expect_mapping_list,
    expect_str,
    get_optional_value,
    get_required_value,
)


@dataclass(frozen=True, slots=True)
class BookConfig:
    """One configured book.

    Attributes:
        id: Book identifier.
        name: Display name, matched by ``book:`` filters.
        tree_dir: Directory holding the book's tree files.
        no_tree: Books without a tree are never searched.
    """

    id: str
    name: str
    tree_dir: str
    no_tree: bool = False


@dataclass(frozen=True, slots=True)
class LibraryConfig:
    """Configured books, in display order."""

    books: tuple[BookConfig, ...]

    @property
    def searchable(self) -> tuple[BookConfig, ...]:
        return tuple(book for book in self.books if not book.no_tree)


def load_library(raw: Mapping[str, Any]) -> LibraryConfig:
    """Load the ``books`` list.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If required keys are missing.
    """
    items = expect_mapping_list(get_required_value(raw, "books", "books"), "books")
    books = []
    for idx, item in enumerate(items):
        key = f"books[{idx}]"
        books.append(
            BookConfig(
                id=expect_str(get_required_value(item, "id", f"{key}.id"), f"{key}.id"),
                name=expect_str(get_required_value(item, "name", f"{key}.name"), f"{key}.name"),
                tree_dir=expect_str(get_required_value(item, "tree_dir", f"{key}.tree_dir"), f"{key}.tree_dir"),
                no_tree=expect_bool(get_optional_value(item, "no_tree", False), f"{key}.no_tree"),
            )
        )
    return LibraryConfig(books=tuple(books))


def check_library(config: LibraryConfig) -> None:
    """Validate library constraints.

    Raises:
        ValueError: If book ids or names are duplicated or empty.
    """
    if not config.books:
        raise ValueError("books must include at least one book")
    seen_ids: set[str] = set()
    seen_names: set[str] = set()
    for idx, book in enumerate(config.books):
        if not book.name.strip():
            raise ValueError(f"books[{idx}].name must not be empty")
        if not book.no_tree and not book.tree_dir.strip():
            raise ValueError(f"books[{idx}].tree_dir must not be empty")
        if book.id in seen_ids:
            raise ValueError(f"books has duplicate id: {book.id}")
        if book.name in seen_names:
            raise ValueError(f"books has duplicate name: {book.name}")
        seen_ids.add(book.id)
        seen_names.add(book.name)
