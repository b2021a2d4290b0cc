"""Command runner for coordinating CLI execution.

Manages logging configuration, component creation and error handling for
command execution.
"""

from __future__ import annotations

from typing import Sequence

import click

from ScrapbookSearch.cli.commands import BooksCommand, SearchCommand
from ScrapbookSearch.config import AppConfig
from ScrapbookSearch.core.query import InvalidQueryError
from ScrapbookSearch.renderers import create_output_writer
from ScrapbookSearch.storage import load_books
from ScrapbookSearch.utils.log import configure_logging, log


class CommandRunner:
    """Orchestrates command execution with logging and error boundaries."""

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    def _configure_logging(self, action: str) -> None:
        configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )

    def run_search(
        self,
        action: str,
        *,
        keywords: str,
        books: Sequence[str] = (),
        roots: Sequence[str] = (),
        formats: tuple[str, ...] = (),
    ) -> None:
        """Execute the search command.

        Args:
            action: The CLI command name (e.g., 'search').
            keywords: User query text.
            books: Book names to search; every book if empty.
            roots: Root ids to search under.
            formats: Output formats overriding the configuration.

        Raises:
            click.Abort: When the query is invalid or the search fails.
        """
        self._configure_logging(action)
        try:
            output_writer = create_output_writer(self.config, formats or None)
            command = SearchCommand(
                config=self.config,
                output_writer=output_writer,
                load_books=load_books,
                keywords=keywords,
                books=books,
                roots=roots,
            )
            command.execute()
            output_writer.finalize(action)
        except InvalidQueryError as e:
            raise click.Abort from e
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Search failed: %s", e)
            raise click.Abort from e

    def run_books(self, action: str) -> None:
        """List configured books."""
        self._configure_logging(action)
        BooksCommand(self.config).execute()
