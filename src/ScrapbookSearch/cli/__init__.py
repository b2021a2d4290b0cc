"""CLI package for ScrapbookSearch command orchestration."""

from __future__ import annotations

__all__ = ["CommandRunner", "cli", "main"]

from dotenv import load_dotenv

from ScrapbookSearch.cli.runner import CommandRunner
from ScrapbookSearch.cli.ui import cli


def main() -> None:
    """Run ScrapbookSearch CLI.

    Entry point referenced by console script in pyproject.toml. Loads a
    .env file first so SCRAPBOOK_SEARCH_CONFIG may be set there.
    """
    load_dotenv()
    cli()
