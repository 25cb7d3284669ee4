"""
Domain entities for historical stock price data.
Zero external dependencies: pure Python dataclasses only.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional, Union

Number = Union[int, float]


@dataclass(frozen=True)
class DailyRecord:
    """One trading day. Absent provider values stay ``None``."""

    date: date
    open: Optional[Number]
    high: Optional[Number]
    low: Optional[Number]
    close: Optional[Number]
    volume: Optional[Number]


@dataclass(frozen=True)
class SymbolListing:
    symbol: str
    company_name: str
