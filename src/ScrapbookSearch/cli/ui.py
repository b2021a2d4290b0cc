"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands
to their respective runners.
"""

from __future__ import annotations

from pathlib import Path

import click

from ScrapbookSearch.cli.runner import CommandRunner
from ScrapbookSearch.config import DEFAULT_CONFIG_PATH, load_config


@click.group(help="ScrapbookSearch: search archived items of scrapbook books.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    envvar="SCRAPBOOK_SEARCH_CONFIG",
    help="Path to YAML config file.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path) -> None:
    """CLI entry group.

    Args:
        ctx: Click context.
        config_path: Path to YAML config file.
    """
    ctx.obj = load_config(config_path)


@cli.command("search", context_settings={"ignore_unknown_options": True})
@click.argument("keywords", nargs=-1)
@click.option("--book", "books", multiple=True, help="Book name to search; repeatable.")
@click.option("--root", "roots", multiple=True, help="Root item id to search under; repeatable.")
@click.option(
    "--format",
    "formats",
    multiple=True,
    type=click.Choice(["console", "json"]),
    help="Output format overriding the config; repeatable.",
)
@click.pass_context
def search_cmd(
    ctx: click.Context,
    keywords: tuple[str, ...],
    books: tuple[str, ...],
    roots: tuple[str, ...],
    formats: tuple[str, ...],
) -> None:
    """Search books with a query such as: title:foo -tcc:bar sort:-modify

    Raises:
        click.Abort: When the query is invalid or the search fails.
    """
    runner = CommandRunner(ctx.obj)
    runner.run_search(
        action=ctx.command.name,
        keywords=" ".join(keywords),
        books=books,
        roots=roots,
        formats=formats,
    )


@cli.command("books")
@click.pass_context
def books_cmd(ctx: click.Context) -> None:
    """List configured books."""
    CommandRunner(ctx.obj).run_books(action=ctx.command.name)
