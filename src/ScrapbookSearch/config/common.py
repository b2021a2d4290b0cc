from __future__ import annotations

"""Shared helpers for configuration loading and validation.

Every helper names the offending key by its full dotted path
(``books[0].tree_dir``) so errors can be traced back to the YAML file.
"""

from typing import Any, Mapping

_TYPE_LABELS = {
    str: "a string",
    bool: "a boolean",
    int: "an integer",
    list: "a list",
    Mapping: "an object",
}


def _check_type(value: Any, expected: type, config_key: str) -> Any:
    # bool is an int subclass; integer keys must not accept true/false.
    if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
        raise TypeError(f"{config_key} must be {_TYPE_LABELS[expected]}")
    return value


def _check_items(value: Any, item_type: type, config_key: str) -> list[Any]:
    items = _check_type(value, list, config_key)
    for idx, item in enumerate(items):
        _check_type(item, item_type, f"{config_key}[{idx}]")
    return list(items)


def get_section(raw: Mapping[str, Any], key: str, *, required: bool) -> Mapping[str, Any]:
    """Return a top-level section, or an empty mapping when an optional one is absent.

    Raises:
        ValueError: If a required section is missing.
        TypeError: If the section is not a mapping.
    """
    section = raw.get(key)
    if section is None:
        if required:
            raise ValueError(f"Missing required config: {key}")
        return {}
    return _check_type(section, Mapping, key)


def get_required_value(section: Mapping[str, Any], field: str, config_key: str) -> Any:
    if field not in section:
        raise ValueError(f"Missing required config: {config_key}")
    return section[field]


def get_optional_value(section: Mapping[str, Any], field: str, default: Any) -> Any:
    return section.get(field, default)


def expect_str(value: Any, config_key: str) -> str:
    return _check_type(value, str, config_key)


def expect_optional_str(value: Any, config_key: str) -> str | None:
    """Validate a string that may be null."""
    return None if value is None else expect_str(value, config_key)


def expect_bool(value: Any, config_key: str) -> bool:
    return _check_type(value, bool, config_key)


def expect_int(value: Any, config_key: str) -> int:
    return _check_type(value, int, config_key)


def expect_str_list(value: Any, config_key: str) -> list[str]:
    """Validate a list of strings, e.g. ``output.formats``."""
    return _check_items(value, str, config_key)


def expect_mapping_list(value: Any, config_key: str) -> list[Mapping[str, Any]]:
    """Validate a list of objects, e.g. the ``books`` entries."""
    return _check_items(value, Mapping, config_key)
