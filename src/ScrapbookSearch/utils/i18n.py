"""Localized user-facing messages.

Catalogs are YAML mappings shipped in ``ScrapbookSearch/locales`` named
``messages.<lang>.yml``. Lookups fall back to English, then to the key itself.
Placeholders use ``str.format`` positional syntax (``{0}``).
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

import yaml

_LOCALES_DIR = Path(__file__).resolve().parents[1] / "locales"
_FALLBACK_LANG = "en"


def _read_catalog(path: Path) -> dict[str, str]:
    if not path.exists():
        return {}
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, Mapping):
        raise ValueError(f"Message catalog must be a mapping: {path}")
    return {str(k): str(v) for k, v in data.items()}


class Messages:
    """Message catalog for one language with English fallback."""

    def __init__(self, lang: str = _FALLBACK_LANG, base_dir: Path | None = None) -> None:
        self.lang = (lang or _FALLBACK_LANG).lower()
        self.base_dir = base_dir or _LOCALES_DIR
        self._fallback = _read_catalog(self.base_dir / f"messages.{_FALLBACK_LANG}.yml")
        if self.lang == _FALLBACK_LANG:
            self._catalog = self._fallback
        else:
            self._catalog = _read_catalog(self.base_dir / f"messages.{self.lang}.yml")

    def t(self, key: str, *args: Any) -> str:
        template = self._catalog.get(key) or self._fallback.get(key) or key
        return template.format(*args) if args else template


@lru_cache(maxsize=8)
def get_messages(lang: str = _FALLBACK_LANG) -> Messages:
    """Return a shared catalog for `lang`."""
    return Messages(lang)
