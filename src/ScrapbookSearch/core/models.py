from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from types import MappingProxyType
from typing import Any, Mapping, Optional

_KNOWN_META_KEYS = (
    "title",
    "comment",
    "source",
    "icon",
    "type",
    "create",
    "modify",
    "marked",
    "locked",
)


@dataclass(frozen=True, slots=True)
class ItemMeta:
    """Metadata of one archived item.

    Attributes:
        title: Item title.
        comment: User comment.
        source: Original URL the item was captured from.
        icon: Favicon URL or data URL.
        type: Item type ("" for a regular page, "folder", "note", ...).
        create: Creation timestamp as a 17-digit string.
        modify: Last modification timestamp as a 17-digit string.
        marked: Whether the item is marked.
        locked: Whether the item is locked.
        extra: Any other metadata key of the item.
    """

    title: str = ""
    comment: str = ""
    source: str = ""
    icon: str = ""
    type: str = ""
    create: str = ""
    modify: str = ""
    marked: bool = False
    locked: bool = False
    extra: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ItemMeta":
        """Build metadata from a raw tree mapping, keeping unknown keys in `extra`."""
        return cls(
            title=str(data.get("title") or ""),
            comment=str(data.get("comment") or ""),
            source=str(data.get("source") or ""),
            icon=str(data.get("icon") or ""),
            type=str(data.get("type") or ""),
            create=str(data.get("create") or ""),
            modify=str(data.get("modify") or ""),
            marked=bool(data.get("marked")),
            locked=bool(data.get("locked")),
            extra={k: v for k, v in data.items() if k not in _KNOWN_META_KEYS},
        )

    def get(self, key: str) -> Any:
        """Return a metadata value by key, or None when absent."""
        if key in _KNOWN_META_KEYS:
            return getattr(self, key)
        return self.extra.get(key)


@dataclass(frozen=True, slots=True)
class FulltextSegment:
    """Extracted text of one file of an item (main page or embedded frame)."""

    content: str = ""


@dataclass(frozen=True, slots=True)
class Record:
    """One item paired with one of its fulltext segments.

    Attributes:
        id: Item identifier.
        file: Segment key inside the item ("" when the item has no fulltext).
        meta: Item metadata, None if the item has no metadata entry.
        fulltext: The pinned fulltext segment.
    """

    id: str
    file: str
    meta: Optional[ItemMeta]
    fulltext: FulltextSegment = FulltextSegment()
