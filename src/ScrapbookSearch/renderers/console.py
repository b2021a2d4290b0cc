"""Console text output.

Prints a headline per book followed by one line per matched record.
"""

from __future__ import annotations

from typing import Iterable

from ScrapbookSearch.renderers.base import OutputWriter
from ScrapbookSearch.renderers.view_models import BookResultView, ResultView
from ScrapbookSearch.utils.i18n import Messages, get_messages
from ScrapbookSearch.utils.log import log


def render_text(results: Iterable[ResultView]) -> str:
    """Render result views into a text block, one ``id [file] title`` line each."""
    lines: list[str] = []
    for idx, view in enumerate(results, start=1):
        file_part = f" [{view.file}]" if view.file else ""
        flags = "".join(flag for flag, on in (("*", view.marked), ("#", view.locked)) if on)
        prefix = f"{flags} " if flags else ""
        lines.append(f"{idx}. {prefix}{view.id}{file_part} {view.title}")
    return "\n".join(lines) + "\n" if lines else ""


class ConsoleOutputWriter(OutputWriter):
    """Write results to console via logging."""

    def __init__(self, messages: Messages | None = None) -> None:
        self.messages = messages or get_messages()

    def write_book_result(self, result: BookResultView, query_str: str) -> None:
        log.info(self.messages.t("search_found", result.book_name, len(result.results)))
        for line in render_text(result.results).splitlines():
            log.info(line)

    def finalize(self, action: str) -> None:
        """No-op for console output."""
