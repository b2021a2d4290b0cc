"""Runtime domain configuration (logging, language, time zone)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ScrapbookSearch.config.common import (
    expect_bool,
    expect_optional_str,
    expect_str,
    get_optional_value,
    get_required_value,
    get_section,
)
from ScrapbookSearch.core.dates import local_zone

_ALLOWED_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """Store validated process-level settings.

    Attributes:
        level: Log level name.
        to_file: Whether logs are mirrored to a file.
        dir: Base directory of log files.
        lang: Message catalog language.
        timezone: Time zone name for date filters; None means system zone.
    """

    level: str
    to_file: bool
    dir: str
    lang: str = "en"
    timezone: str | None = None


def load_runtime(raw: Mapping[str, Any]) -> RuntimeConfig:
    """Load runtime configuration from the ``log`` and ``runtime`` sections.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If required keys are missing.
    """
    log_section = get_section(raw, "log", required=True)
    runtime_section = get_section(raw, "runtime", required=False)
    return RuntimeConfig(
        level=expect_str(get_required_value(log_section, "level", "log.level"), "log.level").upper(),
        to_file=expect_bool(get_required_value(log_section, "to_file", "log.to_file"), "log.to_file"),
        dir=expect_str(get_required_value(log_section, "dir", "log.dir"), "log.dir"),
        lang=expect_str(get_optional_value(runtime_section, "lang", "en"), "runtime.lang").lower(),
        timezone=expect_optional_str(get_optional_value(runtime_section, "timezone", None), "runtime.timezone"),
    )


def check_runtime(config: RuntimeConfig) -> None:
    """Validate runtime domain constraints.

    Raises:
        ValueError: If values violate runtime constraints.
    """
    if config.level not in _ALLOWED_LOG_LEVELS:
        raise ValueError(f"log.level must be one of {sorted(_ALLOWED_LOG_LEVELS)}")
    if not config.dir.strip():
        raise ValueError("log.dir must not be empty")
    if not config.lang.strip():
        raise ValueError("runtime.lang must not be empty")
    if config.timezone:
        try:
            local_zone(config.timezone)
        except ValueError as error:
            raise ValueError(f"runtime.timezone is invalid: {config.timezone}") from error
