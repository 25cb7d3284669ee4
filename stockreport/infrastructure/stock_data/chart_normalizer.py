"""
Infrastructure adapter: Yahoo Finance chart payload → ISeriesNormalizer.

The nested chart response is modelled with pydantic so a missing or mistyped
branch fails as MalformedPayloadError instead of an arbitrary KeyError:

    {"chart": {"result": [{"timestamp": [...],
                           "indicators": {"quote": [{"open": [...], "high": [...],
                                                     "low": [...], "close": [...],
                                                     "volume": [...]}]}}],
               "error": null}}

Numbers and timestamps are strict types: numeric strings and booleans are
rejected, not coerced.
"""

from datetime import datetime, timezone
from typing import Any, Optional, Union

from pydantic import BaseModel, StrictFloat, StrictInt, ValidationError

from stockreport.domain.entities.stock_price import DailyRecord
from stockreport.domain.exceptions import MalformedPayloadError
from stockreport.domain.ports.stock_data_port import ISeriesNormalizer

Number = Union[StrictInt, StrictFloat]


class Quote(BaseModel):
    open: list[Optional[Number]]
    high: list[Optional[Number]]
    low: list[Optional[Number]]
    close: list[Optional[Number]]
    volume: list[Optional[Number]]


class Indicators(BaseModel):
    quote: list[Quote]


class ChartResult(BaseModel):
    timestamp: list[StrictInt]
    indicators: Indicators


class ChartError(BaseModel):
    code: Optional[str] = None
    description: Optional[str] = None


class Chart(BaseModel):
    result: Optional[list[ChartResult]] = None
    error: Optional[ChartError] = None


class ChartResponse(BaseModel):
    chart: Chart


def _at(values: list[Optional[Number]], index: int) -> Optional[Number]:
    return values[index] if index < len(values) else None


class YahooChartNormalizer(ISeriesNormalizer):
    """Converts chart.result[0] into one DailyRecord per timestamp, in provider order."""

    def parse(self, payload: Any) -> ChartResult:
        try:
            response = ChartResponse.model_validate(payload)
        except ValidationError as exc:
            raise MalformedPayloadError(f"Unexpected chart payload: {exc.error_count()} error(s)") from exc

        chart = response.chart
        if not chart.result:
            reason = chart.error.description if chart.error and chart.error.description else "no result"
            raise MalformedPayloadError(f"Chart payload has no result: {reason}")
        result = chart.result[0]
        if not result.indicators.quote:
            raise MalformedPayloadError("Chart payload has no quote indicators")
        return result

    def normalize(self, payload: dict[str, Any]) -> list[DailyRecord]:
        result = self.parse(payload)
        quote = result.indicators.quote[0]
        return [
            DailyRecord(
                date=datetime.fromtimestamp(timestamp, tz=timezone.utc).date(),
                open=_at(quote.open, index),
                high=_at(quote.high, index),
                low=_at(quote.low, index),
                close=_at(quote.close, index),
                volume=_at(quote.volume, index),
            )
            for index, timestamp in enumerate(result.timestamp)
        ]
