"""
Application service: serializes daily records into the CSV export attached to the report.
"""

import math
from datetime import date
from decimal import Decimal
from typing import Iterable, Union

from stockreport.domain.entities.stock_price import DailyRecord

CSV_HEADER = ("Date", "Open", "High", "Low", "Close", "Volume")


def format_value(value: Union[date, int, float, Decimal, str, None]) -> str:
    """Render one cell: empty for missing, plain decimal notation for numbers."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            return ""
        if value.is_integer():
            return str(int(value))
        return format(Decimal(repr(value)), "f")
    if isinstance(value, Decimal):
        if not value.is_finite():
            return ""
        if value == value.to_integral_value():
            return format(value.quantize(Decimal(1)), "f")
        return format(value.normalize(), "f")
    return str(value)


def render(records: Iterable[DailyRecord]) -> str:
    """Return the header line followed by one row per record, joined by newlines.

    An empty input yields the header alone, without a trailing newline.
    """
    lines = [",".join(CSV_HEADER)]
    for record in records:
        cells = (record.date, record.open, record.high, record.low, record.close, record.volume)
        lines.append(",".join(format_value(cell) for cell in cells))
    return "\n".join(lines)
