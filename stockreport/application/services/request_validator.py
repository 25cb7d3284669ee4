"""
Application service: field-level validation of an incoming stock request.

Symbol existence is checked against the injected ISymbolDirectory, which is
fail-closed: if the directory cannot be consulted the symbol is rejected.
Depends only on Domain ports and entities: no infrastructure imports.
"""

import re
from typing import Optional

from loguru import logger

from stockreport.application.services.date_range_policy import (
    DateInput,
    DateRangePolicy,
    parse_calendar_date,
)
from stockreport.domain.entities.stock_request import StockRequest
from stockreport.domain.exceptions import ValidationError
from stockreport.domain.ports.symbol_directory_port import ISymbolDirectory

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

INVALID_SYMBOL = "Invalid company symbol"
INVALID_EMAIL = "Invalid email format"


def is_valid_email(value: Optional[str]) -> bool:
    return isinstance(value, str) and bool(EMAIL_PATTERN.fullmatch(value))


class SymbolValidator:
    def __init__(self, directory: ISymbolDirectory) -> None:
        self._directory = directory

    def validate(self, symbol: Optional[str]) -> Optional[str]:
        """Return None if *symbol* is listed, otherwise the rejection message."""
        if not isinstance(symbol, str) or not symbol:
            return INVALID_SYMBOL
        if not self._directory.exists(symbol):
            return INVALID_SYMBOL
        return None


class RequestValidator:
    """Validates all four submitted fields and builds the immutable StockRequest.

    Error keys use the submitted field names: companySymbol, startDate,
    endDate and email.
    """

    def __init__(
        self,
        directory: ISymbolDirectory,
        date_policy: Optional[DateRangePolicy] = None,
    ) -> None:
        self._symbols = SymbolValidator(directory)
        self._dates = date_policy or DateRangePolicy()

    def validate(
        self,
        symbol: Optional[str],
        start_date: DateInput,
        end_date: DateInput,
        email: Optional[str],
    ) -> dict[str, str]:
        errors: dict[str, str] = {}

        symbol_error = self._symbols.validate(symbol)
        if symbol_error:
            errors["companySymbol"] = symbol_error

        start_error = self._dates.validate_start(start_date, end_date)
        if start_error:
            errors["startDate"] = start_error

        end_error = self._dates.validate_end(end_date, start_date)
        if end_error:
            errors["endDate"] = end_error

        if not is_valid_email(email):
            errors["email"] = INVALID_EMAIL

        if errors:
            logger.info("Stock request rejected for {!r}: {}", symbol, errors)
        return errors

    def build(
        self,
        symbol: Optional[str],
        start_date: DateInput,
        end_date: DateInput,
        email: Optional[str],
    ) -> StockRequest:
        """Validate the fields and return the request with parsed dates.

        Raises:
            ValidationError: carrying every field-level rejection.
        """
        errors = self.validate(symbol, start_date, end_date, email)
        if errors:
            raise ValidationError(errors)
        return StockRequest(
            symbol=symbol,
            start_date=parse_calendar_date(start_date),
            end_date=parse_calendar_date(end_date),
            email=email,
        )

    def check(self, request: StockRequest) -> None:
        """Re-validate an already built request.

        Raises:
            ValidationError: if any field no longer passes.
        """
        errors = self.validate(request.symbol, request.start_date, request.end_date, request.email)
        if errors:
            raise ValidationError(errors)
