"""
Infrastructure adapter: RapidAPI "yh-finance" chart endpoint → IStockSeriesProvider.

One synchronous GET per request, no caching and no retry. The endpoint URL and
API key are checked before any network call so a misconfigured deployment
surfaces as ConfigurationError rather than UpstreamError.
"""

from datetime import date
from typing import Any, Optional

import httpx
from loguru import logger

from stockreport.application.services.range_bucketer import bucket
from stockreport.domain.exceptions import ConfigurationError, MalformedPayloadError, UpstreamError
from stockreport.domain.ports.stock_data_port import IStockSeriesProvider


class RapidApiChartProvider(IStockSeriesProvider):
    """Fetches daily OHLCV chart data for a symbol from the RapidAPI Yahoo Finance proxy."""

    INTERVAL = "1d"
    REGION = "US"

    def __init__(
        self,
        url: Optional[str],
        api_key: Optional[str],
        api_host: Optional[str] = None,
        timeout: float = 30.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._url = url
        self._api_key = api_key
        self._api_host = api_host
        self._timeout = timeout
        self._client = client

    def build_params(self, symbol: str, start_date: date, end_date: date) -> dict[str, Any]:
        return {
            "interval": self.INTERVAL,
            "symbol": symbol,
            "range": bucket(start_date, end_date),
            "region": self.REGION,
            "includePrePost": False,
            "useYfid": True,
            "includeAdjustedClose": True,
        }

    def fetch(self, symbol: str, start_date: date, end_date: date) -> dict[str, Any]:
        if not self._url:
            raise ConfigurationError("RAPID_API_URL")
        if not self._api_key:
            raise ConfigurationError("RAPID_API_KEY")

        params = self.build_params(symbol, start_date, end_date)
        headers = {"X-RapidAPI-Key": self._api_key}
        if self._api_host:
            headers["X-RapidAPI-Host"] = self._api_host

        logger.info("Fetching {} chart for {} ({} to {})", params["range"], symbol, start_date, end_date)
        try:
            response = self._get(params, headers)
            response.raise_for_status()
        except httpx.InvalidURL as exc:
            raise ConfigurationError("RAPID_API_URL") from exc
        except httpx.HTTPStatusError as exc:
            raise UpstreamError(
                f"Chart request for {symbol!r} failed with HTTP {exc.response.status_code}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise UpstreamError(f"Chart request for {symbol!r} failed: {exc}") from exc

        try:
            return response.json()
        except ValueError as exc:
            raise MalformedPayloadError(f"Chart response for {symbol!r} is not valid JSON") from exc

    def _get(self, params: dict[str, Any], headers: dict[str, str]) -> httpx.Response:
        if self._client is not None:
            return self._client.get(self._url, params=params, headers=headers, timeout=self._timeout)
        with httpx.Client(timeout=self._timeout) as client:
            return client.get(self._url, params=params, headers=headers)
