"""Output renderers for search results.

Provides the OutputWriter abstraction and a factory that instantiates the
writers named by configuration.
"""

from __future__ import annotations

from ScrapbookSearch.config import AppConfig
from ScrapbookSearch.renderers.base import MultiOutputWriter, OutputWriter
from ScrapbookSearch.renderers.console import ConsoleOutputWriter, render_text
from ScrapbookSearch.renderers.json import JsonFileWriter, render_json
from ScrapbookSearch.utils.i18n import get_messages


def create_output_writer(config: AppConfig, formats: tuple[str, ...] | None = None) -> OutputWriter:
    """Create output writer based on config.

    Args:
        config: Application configuration.
        formats: Formats overriding ``output.formats``.

    Returns:
        Writer delegating to every selected format.
    """
    selected = formats or config.output.formats
    writers: list[OutputWriter] = []
    if "console" in selected:
        writers.append(ConsoleOutputWriter(get_messages(config.runtime.lang)))
    if "json" in selected:
        writers.append(JsonFileWriter(config.output.base_dir))

    if not writers:
        raise ValueError("No output writers configured")
    return MultiOutputWriter(writers)


__all__ = [
    "OutputWriter",
    "ConsoleOutputWriter",
    "JsonFileWriter",
    "MultiOutputWriter",
    "render_json",
    "render_text",
    "create_output_writer",
]
