"""
Application service: calendar-date parsing and the start/end date policy.

Dates may arrive already parsed (``date`` / ``datetime``) or as strings. Strings
must be ``YYYY-MM-DD`` or a full ISO-8601 timestamp; anything else is treated as
a format failure. Comparisons happen at calendar-day granularity, so the time of
day never affects the outcome.
"""

import re
from datetime import date, datetime
from typing import Callable, Optional, Union

DateInput = Union[date, datetime, str, None]

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_ISO_TIMESTAMP = re.compile(r"^\d{4}-\d{2}-\d{2}[T ]")


def parse_calendar_date(value: DateInput) -> Optional[date]:
    """Return the calendar date carried by *value*, or None if it is not one."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    raw = value.strip()
    if _ISO_DATE.match(raw):
        try:
            return date.fromisoformat(raw)
        except ValueError:
            return None
    if _ISO_TIMESTAMP.match(raw):
        # fromisoformat() only accepts a trailing "Z" from Python 3.11 onwards
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(raw).date()
        except ValueError:
            return None
    return None


def to_iso_date(value: DateInput) -> str:
    """Render any accepted date input as ``YYYY-MM-DD``.

    Raises:
        ValueError: if *value* is not a calendar date.
    """
    parsed = parse_calendar_date(value)
    if parsed is None:
        raise ValueError(f"Not a calendar date: {value!r}")
    return parsed.isoformat()


class DateRangePolicy:
    """Validates a start/end pair: both well-formed, not in the future, start <= end.

    Each method returns None when the value passes, otherwise the rejection
    message shown to the submitter.
    """

    def __init__(self, today: Callable[[], date] = date.today) -> None:
        self._today = today

    def validate_start(self, value: DateInput, end_value: DateInput = None) -> Optional[str]:
        start = parse_calendar_date(value)
        if start is None:
            return "Invalid Start Date format. Expected format: YYYY-MM-DD"
        if start > self._today():
            return "Start Date cannot be in the future"
        end = parse_calendar_date(end_value)
        if end is not None and start > end:
            return "Start Date must be before or equal to End Date"
        return None

    def validate_end(self, value: DateInput, start_value: DateInput = None) -> Optional[str]:
        end = parse_calendar_date(value)
        if end is None:
            return "Invalid End Date format. Expected format: YYYY-MM-DD"
        if end > self._today():
            return "End Date cannot be in the future"
        start = parse_calendar_date(start_value)
        if start is not None and end < start:
            return "End Date must be after or equal to Start Date"
        return None
