"""
Clock-time and calendar-date parsing for service records.

Times are 24h `HH:MM` strings and dates are `DD/MM/YYYY` strings, the
canonical encodings of the service log. Times are strict: a bad time raises
FormatError where the record is built. Dates are lenient: a bad date becomes
"today" so the aggregation pipeline always produces an answer.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, List, Optional, Sequence

from duty_report.utils.logging import get_logger

log = get_logger(__name__)


class FormatError(ValueError):
    """Raised when a clock time is not a well-formed `HH:MM` string."""


def parse_clock(text: str) -> float:
    """
    Convert an `HH:MM` string into fractional hours since midnight.

    Raises
    ------
    FormatError
        If the string does not have two numeric parts or is out of range.
    """
    parts = str(text).strip().split(":")
    if len(parts) != 2 or not all(p.isdecimal() for p in parts):
        raise FormatError(f"Malformed time {text!r}; expected HH:MM")
    hours, minutes = int(parts[0]), int(parts[1])
    if hours > 23 or minutes > 59:
        raise FormatError(f"Time out of range {text!r}; expected 00:00-23:59")
    return hours + minutes / 60


def compute_duration(start: str, end: str) -> float:
    """
    Elapsed hours between two wall-clock times, rounded to 2 decimals.

    An end earlier than the start is an overnight shift crossing midnight
    once, e.g. ``compute_duration("18:30", "07:00") == 12.5``.
    """
    elapsed = parse_clock(end) - parse_clock(start)
    if elapsed < 0:
        elapsed += 24
    return round(elapsed, 2)


def _split_date(text: str) -> Optional[Sequence[int]]:
    parts = str(text).strip().split("/")
    if len(parts) != 3 or not all(p.isdecimal() for p in parts):
        return None
    day, month, year = (int(p) for p in parts)
    if not (day and month and year):
        return None
    return day, month, year


def is_valid_date(text: str) -> bool:
    """True when `text` is a real `DD/MM/YYYY` calendar date."""
    parsed = _split_date(text)
    if parsed is None:
        return False
    day, month, year = parsed
    try:
        date(year, month, day)
    except ValueError:
        return False
    return True


def parse_date(text: str, today: Optional[date] = None) -> date:
    """
    Parse a `DD/MM/YYYY` string into a date.

    Never raises: a missing, non-numeric, zero or impossible component yields
    `today` (defaulting to the current date).
    """
    parsed = _split_date(text)
    if parsed is not None:
        day, month, year = parsed
        try:
            return date(year, month, day)
        except ValueError:
            pass
    log.debug("Unparseable date, using fallback", extra={"date": text})
    return today or date.today()


def malformed_dates(records: Iterable) -> List:
    """Records whose `date` would fall back to "today" when parsed."""
    return [r for r in records if not is_valid_date(r.date)]


__all__ = [
    "FormatError",
    "compute_duration",
    "is_valid_date",
    "malformed_dates",
    "parse_clock",
    "parse_date",
]
