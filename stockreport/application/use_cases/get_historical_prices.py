"""
Use-case: fetch and normalize the daily price history for a symbol without emailing it.
Backs the CLI ``preview`` command. Depends only on Domain ports and entities.
"""

from datetime import date

from stockreport.domain.entities.stock_price import DailyRecord
from stockreport.domain.ports.stock_data_port import ISeriesNormalizer, IStockSeriesProvider


class GetHistoricalPricesUseCase:
    def __init__(self, provider: IStockSeriesProvider, normalizer: ISeriesNormalizer) -> None:
        self._provider = provider
        self._normalizer = normalizer

    def execute(self, symbol: str, start_date: date, end_date: date) -> list[DailyRecord]:
        """Fetch the history for *symbol* over the bucketed range.

        Raises:
            ValueError: if *symbol* is blank or *end_date* is before *start_date*.
            Any StockReportError propagated from the provider or normalizer.
        """
        if not symbol or not symbol.strip():
            raise ValueError("symbol must be a non-empty string")
        if end_date < start_date:
            raise ValueError("end_date must not be before start_date")
        payload = self._provider.fetch(symbol.strip(), start_date, end_date)
        return self._normalizer.normalize(payload)
