"""ScrapbookSearch logging utilities.

All modules log through the single package logger ``log``. The CLI runner
calls `configure_logging` once before doing any work.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Final

_LEVEL_ABBREV: Final[dict[int, str]] = {
    logging.DEBUG: "DEBG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERRO",
    logging.CRITICAL: "CRIT",
}

_FORMAT: Final[str] = "%(asctime)s [%(levelabbr)s] %(message)s"
_DATE_FORMAT: Final[str] = "%m-%d %H:%M:%S"


class _AbbrevLevelFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 - stdlib name
        record.levelabbr = _LEVEL_ABBREV.get(record.levelno, record.levelname[:4])
        return super().format(record)


log = logging.getLogger("ScrapbookSearch")


def log_file_path(log_dir: str, action: str, now: datetime | None = None) -> Path:
    """Return ``<log_dir>/<action>/<action>_<mmddHHMMSS>.log``."""
    timestamp = (now or datetime.now()).strftime("%m%d%H%M%S")
    return Path(log_dir or "log") / action / f"{action}_{timestamp}.log"


def configure_logging(
    *,
    level: str = "INFO",
    action: str | None = None,
    log_to_file: bool = False,
    log_dir: str = "log",
) -> None:
    """Configure the package logger.

    Console output uses the configured level; the optional per-action log
    file always records DEBUG and above.

    Args:
        level: Logging level name (e.g. INFO, DEBUG).
        action: CLI command name, used for the log file path.
        log_to_file: Whether to mirror logs to a file.
        log_dir: Base directory for log files.
    """
    resolved_level = getattr(logging, (level or "INFO").upper(), logging.INFO)
    formatter = _AbbrevLevelFormatter(fmt=_FORMAT, datefmt=_DATE_FORMAT)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(resolved_level)
    stream_handler.setFormatter(formatter)
    handlers: list[logging.Handler] = [stream_handler]

    if log_to_file and action:
        path = log_file_path(log_dir, action)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    log.handlers.clear()
    for handler in handlers:
        log.addHandler(handler)
    log.setLevel(min(logging.DEBUG, resolved_level))
    log.propagate = False
