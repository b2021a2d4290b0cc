"""Compiled filter patterns.

A rule entry is one of three pattern kinds:

- `RegexPattern`: a compiled regular expression with its case-sensitivity
  baked in at compile time.
- `PresencePattern`: a bare marker, only its position (include or exclude)
  matters.
- `DateRange`: an inclusive range of 17-digit timestamps.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True, slots=True)
class RegexPattern:
    """Compiled regular expression filter."""

    regex: re.Pattern[str]
    case_sensitive: bool

    def test(self, text: str) -> bool:
        return self.regex.search(text) is not None


@dataclass(frozen=True, slots=True)
class PresencePattern:
    """Presence marker for boolean flags."""

    present: bool = True


@dataclass(frozen=True, slots=True)
class DateRange:
    """Inclusive timestamp range; both bounds are 17-digit strings."""

    since: str
    until: str

    def contains(self, value: str) -> bool:
        return self.since <= value <= self.until


Pattern = Union[RegexPattern, PresencePattern, DateRange]


def compile_regex(term: str, *, case_sensitive: bool) -> RegexPattern:
    """Compile a user supplied regular expression.

    Raises:
        re.error: If the expression is invalid, including repeat counts or
            nesting too large for the regex engine.
    """
    flags = re.MULTILINE if case_sensitive else re.MULTILINE | re.IGNORECASE
    try:
        regex = re.compile(term, flags)
    except (OverflowError, RecursionError) as error:
        raise re.error(str(error)) from error
    return RegexPattern(regex=regex, case_sensitive=case_sensitive)


def compile_literal(term: str, *, case_sensitive: bool, exact: bool = False) -> RegexPattern:
    """Compile a term that matches literally, anchored on both ends if `exact`."""
    key = re.escape(term)
    if exact:
        key = f"^{key}$"
    return compile_regex(key, case_sensitive=case_sensitive)
