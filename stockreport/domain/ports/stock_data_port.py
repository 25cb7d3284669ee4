"""
Ports (interfaces) for the historical price series provider and its payload normalizer.
Infrastructure adapters (e.g. RapidApiChartProvider, YahooChartNormalizer) must implement these.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Any

from stockreport.domain.entities.stock_price import DailyRecord


class IStockSeriesProvider(ABC):
    @abstractmethod
    def fetch(self, symbol: str, start_date: date, end_date: date) -> dict[str, Any]:
        """Return the provider's raw payload for *symbol* covering the given range.

        Raises:
            ConfigurationError: if the endpoint or credentials are not configured.
            UpstreamError: on transport failure or a non-success response.
        """
        ...


class ISeriesNormalizer(ABC):
    @abstractmethod
    def normalize(self, payload: dict[str, Any]) -> list[DailyRecord]:
        """Convert a raw provider payload into daily records in provider order.

        Raises:
            MalformedPayloadError: if the payload does not have the expected structure.
        """
        ...
