from __future__ import annotations

"""Public configuration API for ScrapbookSearch."""

from ScrapbookSearch.config.app import (
    DEFAULT_CONFIG_PATH,
    AppConfig,
    check_cross_domain,
    load_config,
    load_config_with_defaults,
    parse_config_dict,
)
from ScrapbookSearch.config.library import BookConfig, LibraryConfig
from ScrapbookSearch.config.output import OutputConfig
from ScrapbookSearch.config.runtime import RuntimeConfig
from ScrapbookSearch.config.search import SearchConfig

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "RuntimeConfig",
    "SearchConfig",
    "BookConfig",
    "LibraryConfig",
    "OutputConfig",
    "AppConfig",
    "load_config",
    "load_config_with_defaults",
    "parse_config_dict",
    "check_cross_domain",
]
