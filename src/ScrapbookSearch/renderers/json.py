"""JSON output.

Accumulates per-book results and writes them to
``<base_dir>/json/<action>_<timestamp>.json`` on finalize.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import Iterable

from ScrapbookSearch.renderers.base import OutputWriter
from ScrapbookSearch.renderers.view_models import BookResultView, ResultView
from ScrapbookSearch.utils.log import log


def render_json(results: Iterable[ResultView]) -> list[dict]:
    """Render result views into JSON-serializable dicts."""
    return [asdict(view) for view in results]


class JsonFileWriter(OutputWriter):
    """Accumulate results and write to JSON file on finalize."""

    def __init__(self, base_dir: str) -> None:
        self.output_dir = Path(base_dir) / "json"
        self.all_results: list[dict] = []

    def write_book_result(self, result: BookResultView, query_str: str) -> None:
        self.all_results.append(
            {
                "book_id": result.book_id,
                "book_name": result.book_name,
                "query": query_str,
                "results": render_json(result.results),
            }
        )

    def finalize(self, action: str) -> None:
        payload = json.dumps(self.all_results, ensure_ascii=False, indent=2)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        output_path = self.output_dir / f"{action}_{timestamp}.json"
        output_path.write_text(payload, encoding="utf-8")
        log.info("JSON saved to %s", output_path)

