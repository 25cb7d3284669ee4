"""
Infrastructure adapter: NASDAQ listings JSON → ISymbolDirectory.

The listing is a JSON array of objects with a ``Symbol`` key and the company
name under ``Company Name`` (the datahub mirror uses ``Company``). It is fetched
on every call; nothing is cached.

exists() and display_name() share one lookup but fail in opposite directions:
acceptance is fail-closed (False), naming is fail-open (the raw symbol).
"""

from typing import Optional

import httpx
from loguru import logger

from stockreport.domain.entities.stock_price import SymbolListing
from stockreport.domain.exceptions import ConfigurationError, MalformedPayloadError, StockReportError
from stockreport.domain.ports.symbol_directory_port import ISymbolDirectory

_NAME_KEYS = ("Company Name", "Company")

# Failures that the two fallback paths absorb.
LOOKUP_ERRORS = (StockReportError, httpx.HTTPError, httpx.InvalidURL, ValueError)


class NasdaqSymbolDirectory(ISymbolDirectory):
    def __init__(
        self,
        url: Optional[str],
        timeout: float = 30.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._client = client

    def listings(self) -> list[SymbolListing]:
        """Download and parse the full directory.

        Raises:
            ConfigurationError: if NASDAQ_API is not set.
            httpx.HTTPError: on transport failure or non-success status.
            httpx.InvalidURL: if NASDAQ_API is not a valid URL.
            MalformedPayloadError: if the body is not a list of listings.
        """
        if not self._url:
            raise ConfigurationError("NASDAQ_API")

        if self._client is not None:
            response = self._client.get(self._url, timeout=self._timeout)
        else:
            response = httpx.get(self._url, timeout=self._timeout)
        response.raise_for_status()

        rows = response.json()
        if not isinstance(rows, list):
            raise MalformedPayloadError("Symbol directory did not return a list")

        return [
            SymbolListing(symbol=row["Symbol"], company_name=self._company_name(row))
            for row in rows
            if isinstance(row, dict) and isinstance(row.get("Symbol"), str)
        ]

    def find(self, symbol: str) -> Optional[SymbolListing]:
        return next((listing for listing in self.listings() if listing.symbol == symbol), None)

    def exists(self, symbol: str) -> bool:
        try:
            return self.find(symbol) is not None
        except LOOKUP_ERRORS as exc:
            logger.warning("Symbol lookup for {!r} failed, treating as invalid: {}", symbol, exc)
            return False

    def display_name(self, symbol: str) -> str:
        try:
            listing = self.find(symbol)
        except LOOKUP_ERRORS as exc:
            logger.warning("Company name lookup for {!r} failed, using the symbol: {}", symbol, exc)
            return symbol
        if listing is None or not listing.company_name:
            return symbol
        return listing.company_name

    @staticmethod
    def _company_name(row: dict) -> str:
        for key in _NAME_KEYS:
            value = row.get(key)
            if isinstance(value, str) and value:
                return value
        return ""
