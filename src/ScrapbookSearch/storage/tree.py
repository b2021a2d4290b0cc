"""Book tree loading and hierarchy traversal.

A book's tree directory holds its index as script files, each wrapping one
JSON object in a call, e.g. ``scrapbook.meta({...})``. Large books split a
kind over numbered files (``meta.js``, ``meta1.js``, ``meta2.js``...) which
are merged in numeric order.

- ``meta*.js``: item id -> metadata mapping
- ``toc*.js``: parent id -> list of child ids
- ``fulltext*.js``: item id -> file -> ``{"content": ...}``
"""

from __future__ import annotations

import json
import re
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator, Mapping

from ScrapbookSearch.core.models import FulltextSegment, ItemMeta
from ScrapbookSearch.core.query import ROOT_ID
from ScrapbookSearch.utils.i18n import Messages, get_messages
from ScrapbookSearch.utils.log import log

_TREE_FILE_RE = re.compile(r"(meta|toc|fulltext)(\d*)\.js")
_WRAPPED_JSON_RE = re.compile(r"^[^(]*\((.*)\)[\s;]*$", re.DOTALL)
_MIB = 1024 * 1024


@dataclass(slots=True)
class Book:
    """In-memory index of one book.

    Attributes:
        id: Book identifier.
        name: Display name used by ``book:`` filters.
        meta: Item id to metadata; None for ids listed without metadata.
        toc: Parent id to ordered child ids.
        fulltext: Item id to file key to extracted text.
    """

    id: str
    name: str
    meta: dict[str, ItemMeta | None] = field(default_factory=dict)
    toc: dict[str, list[str]] = field(default_factory=dict)
    fulltext: dict[str, dict[str, FulltextSegment]] = field(default_factory=dict)

    def get_reachable_items(self, root: str = ROOT_ID) -> Iterator[str]:
        """Yield ids reachable from `root` depth-first, `root` first, each once."""
        seen: set[str] = set()
        stack = [root]
        while stack:
            item_id = stack.pop()
            if item_id in seen:
                continue
            seen.add(item_id)
            yield item_id
            stack.extend(reversed(self.toc.get(item_id, ())))


@dataclass(frozen=True, slots=True)
class TreeFileStat:
    """Aggregated file stats of one tree file kind."""

    paths: tuple[Path, ...]
    mtime: float | None
    size: int


def list_tree_files(tree_dir: Path, kind: str) -> list[Path]:
    """Return tree files of one kind sorted by numeric suffix."""
    found: list[tuple[int, Path]] = []
    if not tree_dir.is_dir():
        return []
    for path in tree_dir.iterdir():
        match = _TREE_FILE_RE.fullmatch(path.name)
        if match and match.group(1) == kind:
            found.append((int(match.group(2) or 0), path))
    return [path for _, path in sorted(found)]


def stat_tree_files(paths: list[Path]) -> TreeFileStat:
    mtime: float | None = None
    size = 0
    for path in paths:
        info = path.stat()
        mtime = info.st_mtime if mtime is None else max(mtime, info.st_mtime)
        size += info.st_size
    return TreeFileStat(paths=tuple(paths), mtime=mtime, size=size)


def read_tree_file(path: Path) -> dict[str, Any]:
    """Decode the JSON object wrapped in a tree script file.

    Raises:
        ValueError: If the file does not wrap a JSON object.
    """
    text = path.read_text(encoding="utf-8").strip()
    match = _WRAPPED_JSON_RE.match(text)
    if not match:
        raise ValueError(f"Malformed tree file: {path}")
    try:
        data = json.loads(match.group(1))
    except json.JSONDecodeError as error:
        raise ValueError(f"Malformed tree file: {path}: {error}") from error
    if not isinstance(data, Mapping):
        raise ValueError(f"Tree file must wrap an object: {path}")
    return dict(data)


def merge_tree_files(paths: list[Path]) -> dict[str, Any]:
    merged: dict[str, Any] = {}
    for path in paths:
        merged.update(read_tree_file(path))
    return merged


def format_size(size: int) -> str:
    """Format a byte count the way cache warnings display it."""
    mib = size / _MIB
    if mib > 0.1:
        return f"{mib:.1f} MiB"
    if mib * 1024 > 0.1:
        return f"{mib * 1024:.1f} KiB"
    return f"{size} B"


def load_book(
    book_id: str,
    name: str,
    tree_dir: Path,
    *,
    update_threshold: int = -1,
    size_limit: int = -1,
    messages: Messages | None = None,
    now: float | None = None,
) -> Book:
    """Load a book index from its tree directory.

    Args:
        book_id: Book identifier.
        name: Book display name.
        tree_dir: Directory holding the tree files.
        update_threshold: Seconds a fulltext cache may lag behind metadata
            before it is reported outdated; -1 disables the check.
        size_limit: Maximum fulltext cache size in MiB; -1 for unlimited.
        messages: Catalog for warning texts.
        now: Current time as a UNIX timestamp, for tests.

    Returns:
        Loaded book.

    Raises:
        ValueError: If a tree file is malformed.
    """
    messages = messages or get_messages()
    meta_stat = stat_tree_files(list_tree_files(tree_dir, "meta") + list_tree_files(tree_dir, "toc"))
    fulltext_stat = stat_tree_files(list_tree_files(tree_dir, "fulltext"))
    current = time.time() if now is None else now

    if fulltext_stat.mtime is None:
        log.warning(messages.t("cache_missing", name))
    elif (
        update_threshold >= 0
        and meta_stat.mtime is not None
        and meta_stat.mtime > fulltext_stat.mtime
        and current > fulltext_stat.mtime + update_threshold
    ):
        log.warning(messages.t("cache_outdated", name))

    raw_meta = merge_tree_files(list_tree_files(tree_dir, "meta"))
    raw_toc = merge_tree_files(list_tree_files(tree_dir, "toc"))

    raw_fulltext: dict[str, Any] = {}
    if size_limit >= 0 and fulltext_stat.size > size_limit * _MIB:
        log.warning(messages.t("cache_blocked", name, format_size(fulltext_stat.size)))
    else:
        raw_fulltext = merge_tree_files(list(fulltext_stat.paths))

    book = Book(
        id=book_id,
        name=name,
        meta={
            item_id: ItemMeta.from_mapping(value) if isinstance(value, Mapping) else None
            for item_id, value in raw_meta.items()
        },
        toc={parent: [str(child) for child in children or ()] for parent, children in raw_toc.items()},
        fulltext={item_id: _parse_segments(files) for item_id, files in raw_fulltext.items()},
    )
    log.debug(
        "Loaded book: id=%s items=%d fulltext=%d dir=%s",
        book_id,
        len(book.meta),
        len(book.fulltext),
        tree_dir,
    )
    return book


def _parse_segments(files: Any) -> dict[str, FulltextSegment]:
    if not isinstance(files, Mapping):
        return {}
    segments: dict[str, FulltextSegment] = {}
    for file, data in files.items():
        content = data.get("content") if isinstance(data, Mapping) else None
        segments[str(file)] = FulltextSegment(content=str(content or ""))
    return segments
