"""View models for output rendering.

Separates display concerns from the search records consumed by the engine.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ResultView:
    """One matched record prepared for display.

    Attributes:
        id: Item identifier.
        file: Fulltext file key ("" for the item itself).
        title: Item title, or the id when untitled.
        type: Item type.
        source: Original URL.
        create: Creation timestamp string.
        modify: Modification timestamp string.
        marked: Whether the item is marked.
        locked: Whether the item is locked.
    """

    id: str
    file: str
    title: str
    type: str
    source: str
    create: str
    modify: str
    marked: bool
    locked: bool


@dataclass(frozen=True, slots=True)
class BookResultView:
    """Results of one book."""

    book_id: str
    book_name: str
    results: tuple[ResultView, ...]
