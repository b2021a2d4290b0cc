"""ScrapbookSearch: field-aware query engine for scrapbook books."""

__version__ = "0.1.0"
