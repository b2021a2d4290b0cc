"""Conversion of 17-digit timestamps between UTC and local time.

Timestamps are encoded as ``YYYYMMDDHHMMSSmmm`` so that string order equals
chronological order. Fields may be out of range (e.g. a padded query prefix
like ``2020`` gives month ``00``); month and day are clamped to 1 and other
overflow carries into the next larger unit.
"""

from __future__ import annotations

import re
from datetime import MINYEAR, datetime, tzinfo
from typing import Final

from dateutil import tz
from dateutil.relativedelta import relativedelta

TIMESTAMP_WIDTH: Final[int] = 17
MIN_TIMESTAMP: Final[str] = "0" * TIMESTAMP_WIDTH
MAX_TIMESTAMP: Final[str] = "9" * TIMESTAMP_WIDTH

_TIMESTAMP_RE = re.compile(r"([0-9]{4})([0-9]{2})([0-9]{2})([0-9]{2})([0-9]{2})([0-9]{2})([0-9]{3})")


def local_zone(name: str | None = None) -> tzinfo:
    """Resolve a time zone by name, or the system local zone when name is empty.

    Raises:
        ValueError: If the name is not a known time zone.
    """
    if not name:
        return tz.tzlocal()
    zone = tz.gettz(name)
    if zone is None:
        raise ValueError(f"Unknown time zone: {name}")
    return zone


def date_utc_to_local(timestamp: str, zone: tzinfo | None = None) -> str:
    """Convert a UTC timestamp string to the same encoding in local time.

    Args:
        timestamp: 17-digit UTC timestamp.
        zone: Target zone, the system local zone if None.

    Returns:
        17-digit local timestamp.

    Raises:
        ValueError: If `timestamp` is not exactly 17 digits.
    """
    return _convert(timestamp, tz.UTC, zone or tz.tzlocal())


def date_local_to_utc(timestamp: str, zone: tzinfo | None = None) -> str:
    """Inverse of `date_utc_to_local`."""
    return _convert(timestamp, zone or tz.tzlocal(), tz.UTC)


def _convert(timestamp: str, source: tzinfo, target: tzinfo) -> str:
    match = _TIMESTAMP_RE.fullmatch(timestamp)
    if not match:
        raise ValueError(f"Timestamp must be {TIMESTAMP_WIDTH} digits: {timestamp!r}")
    year, month, day, hour, minute, second, milli = (int(g) for g in match.groups())

    try:
        # Build from Jan 1st and add offsets so out-of-range fields overflow.
        moment = datetime(max(year, MINYEAR), 1, 1, tzinfo=source) + relativedelta(
            months=max(month, 1) - 1,
            days=max(day, 1) - 1,
            hours=hour,
            minutes=minute,
            seconds=second,
            microseconds=milli * 1000,
        )
        converted = moment.astimezone(target)
    except (OverflowError, ValueError):
        return MAX_TIMESTAMP if year > MINYEAR else MIN_TIMESTAMP

    return format_timestamp(converted)


def format_timestamp(moment: datetime) -> str:
    """Encode a datetime as a 17-digit timestamp string."""
    return (
        f"{moment.year:04d}{moment.month:02d}{moment.day:02d}"
        f"{moment.hour:02d}{moment.minute:02d}{moment.second:02d}"
        f"{moment.microsecond // 1000:03d}"
    )
