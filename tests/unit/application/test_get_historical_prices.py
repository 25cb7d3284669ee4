from datetime import date
from unittest.mock import MagicMock

import pytest

from stockreport.application.use_cases.get_historical_prices import GetHistoricalPricesUseCase
from stockreport.infrastructure.stock_data.chart_normalizer import YahooChartNormalizer


def test_fetches_and_normalizes(chart_payload):
    provider = MagicMock()
    provider.fetch.return_value = chart_payload

    records = GetHistoricalPricesUseCase(provider, YahooChartNormalizer()).execute(
        " AAPL ", date(2024, 1, 1), date(2024, 1, 31)
    )

    provider.fetch.assert_called_once_with("AAPL", date(2024, 1, 1), date(2024, 1, 31))
    assert [record.date for record in records] == [date(2024, 1, 2), date(2024, 1, 3)]


@pytest.mark.parametrize(
    "symbol, start, end",
    [("", date(2024, 1, 1), date(2024, 1, 31)), ("AAPL", date(2024, 2, 1), date(2024, 1, 1))],
)
def test_rejects_blank_symbol_and_reversed_range(symbol, start, end):
    provider = MagicMock()

    with pytest.raises(ValueError):
        GetHistoricalPricesUseCase(provider, YahooChartNormalizer()).execute(symbol, start, end)
    provider.fetch.assert_not_called()
