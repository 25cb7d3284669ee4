"""
Application service: maps a date span onto the coarse range token the chart API expects.
"""

import math
from datetime import date, datetime
from typing import Union

_DAY_SECONDS = 24 * 60 * 60

# (inclusive upper bound in days, range token), checked in order
RANGE_BUCKETS: tuple[tuple[int, str], ...] = (
    (30, "1mo"),
    (90, "3mo"),
    (180, "6mo"),
    (365, "1y"),
)
LONGEST_RANGE = "5y"


def span_in_days(start: Union[date, datetime], end: Union[date, datetime]) -> int:
    """Whole days between *start* and *end*, rounding any partial day up."""
    if isinstance(start, datetime) != isinstance(end, datetime):
        # compare calendar days when only one side carries a time
        start = start.date() if isinstance(start, datetime) else start
        end = end.date() if isinstance(end, datetime) else end
    return math.ceil((end - start).total_seconds() / _DAY_SECONDS)


def bucket(start: Union[date, datetime], end: Union[date, datetime]) -> str:
    """Return the smallest range token covering the span from *start* to *end*."""
    days = span_in_days(start, end)
    for limit, token in RANGE_BUCKETS:
        if days <= limit:
            return token
    return LONGEST_RANGE
