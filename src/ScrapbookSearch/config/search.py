"""Search domain configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ScrapbookSearch.config.common import (
    expect_bool,
    expect_int,
    expect_str,
    get_optional_value,
    get_section,
)


@dataclass(frozen=True, slots=True)
class SearchConfig:
    """Store validated search behavior.

    Attributes:
        default_query: Query text prepended to every search.
        frame_records: Whether each fulltext file of an item is its own record.
        cache_update_threshold: Seconds a fulltext cache may lag behind
            metadata before a warning; -1 disables the check.
        fulltext_size_limit: Fulltext cache size limit in MiB; -1 for none.
    """

    default_query: str = ""
    frame_records: bool = True
    cache_update_threshold: int = 5 * 24 * 60 * 60
    fulltext_size_limit: int = -1


def load_search(raw: Mapping[str, Any]) -> SearchConfig:
    """Load search domain config from raw mapping.

    Raises:
        TypeError: If config types are invalid.
    """
    section = get_section(raw, "search", required=False)
    defaults = SearchConfig()
    return SearchConfig(
        default_query=expect_str(
            get_optional_value(section, "default_query", defaults.default_query),
            "search.default_query",
        ),
        frame_records=expect_bool(
            get_optional_value(section, "frame_records", defaults.frame_records),
            "search.frame_records",
        ),
        cache_update_threshold=expect_int(
            get_optional_value(section, "cache_update_threshold", defaults.cache_update_threshold),
            "search.cache_update_threshold",
        ),
        fulltext_size_limit=expect_int(
            get_optional_value(section, "fulltext_size_limit", defaults.fulltext_size_limit),
            "search.fulltext_size_limit",
        ),
    )


def check_search(config: SearchConfig) -> None:
    """Validate search domain constraints.

    Raises:
        ValueError: If values violate search constraints.
    """
    if config.cache_update_threshold < -1:
        raise ValueError("search.cache_update_threshold must be -1 or non-negative")
    if config.fulltext_size_limit < -1:
        raise ValueError("search.fulltext_size_limit must be -1 or non-negative")
