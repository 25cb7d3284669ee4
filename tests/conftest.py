from datetime import date
from typing import Optional

import pytest

from stockreport.application.services.date_range_policy import DateRangePolicy
from stockreport.domain.entities.mail import OutgoingMail
from stockreport.domain.ports.mail_transport_port import IMailTransport
from stockreport.domain.ports.symbol_directory_port import ISymbolDirectory

TODAY = date(2024, 6, 15)


class FakeSymbolDirectory(ISymbolDirectory):
    """In-memory directory; ``available=False`` simulates an unreachable lookup."""

    def __init__(self, names: Optional[dict[str, str]] = None, available: bool = True) -> None:
        self.names = names if names is not None else {"AAPL": "Apple Inc."}
        self.available = available
        self.exists_calls: list[str] = []
        self.name_calls: list[str] = []

    def exists(self, symbol: str) -> bool:
        self.exists_calls.append(symbol)
        return self.available and symbol in self.names

    def display_name(self, symbol: str) -> str:
        self.name_calls.append(symbol)
        if not self.available:
            return symbol
        return self.names.get(symbol, symbol)


class RecordingTransport(IMailTransport):
    def __init__(self, error: Optional[Exception] = None, message_id: str = "<msg-1@test>") -> None:
        self.sent: list[OutgoingMail] = []
        self.error = error
        self.message_id = message_id

    def send(self, mail: OutgoingMail) -> str:
        if self.error is not None:
            raise self.error
        self.sent.append(mail)
        return self.message_id


def make_chart_payload(timestamps, open=None, high=None, low=None, close=None, volume=None):
    """Build a chart payload in the provider's nested shape."""
    size = len(timestamps)
    return {
        "chart": {
            "result": [
                {
                    "meta": {"symbol": "AAPL", "currency": "USD"},
                    "timestamp": list(timestamps),
                    "indicators": {
                        "quote": [
                            {
                                "open": open if open is not None else [150.0] * size,
                                "high": high if high is not None else [155.0] * size,
                                "low": low if low is not None else [149.0] * size,
                                "close": close if close is not None else [153.0] * size,
                                "volume": volume if volume is not None else [1000000] * size,
                            }
                        ],
                        "adjclose": [{"adjclose": [153.0] * size}],
                    },
                }
            ],
            "error": None,
        }
    }


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def date_policy():
    return DateRangePolicy(today=lambda: TODAY)


@pytest.fixture
def directory():
    return FakeSymbolDirectory()


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def chart_payload():
    # 2024-01-02 and 2024-01-03 00:00 UTC
    return make_chart_payload([1704153600, 1704240000])


@pytest.fixture
def payload_factory():
    return make_chart_payload


@pytest.fixture
def directory_factory():
    return FakeSymbolDirectory


@pytest.fixture
def transport_factory():
    return RecordingTransport
