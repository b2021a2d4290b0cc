"""Base classes for output writers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from ScrapbookSearch.renderers.view_models import BookResultView


class OutputWriter(ABC):
    """Abstract base class for search output writers."""

    @abstractmethod
    def write_book_result(self, result: BookResultView, query_str: str) -> None:
        """Write the results of one book.

        Args:
            result: Matched records of the book.
            query_str: Effective query string that produced them.
        """

    @abstractmethod
    def finalize(self, action: str) -> None:
        """Finalize output (e.g., write accumulated results to file).

        Args:
            action: The CLI command name (e.g., 'search').
        """


@dataclass(slots=True)
class MultiOutputWriter(OutputWriter):
    """Delegate output to multiple writers."""

    writers: Sequence[OutputWriter]

    def write_book_result(self, result: BookResultView, query_str: str) -> None:
        for writer in self.writers:
            writer.write_book_result(result, query_str)

    def finalize(self, action: str) -> None:
        for writer in self.writers:
            writer.finalize(action)
