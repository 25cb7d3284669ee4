from datetime import date

import pytest

from stockreport.application.services.request_validator import (
    RequestValidator,
    SymbolValidator,
    is_valid_email,
)
from stockreport.domain.entities.stock_request import StockRequest
from stockreport.domain.exceptions import ValidationError


@pytest.fixture
def validator(directory, date_policy):
    return RequestValidator(directory, date_policy)


@pytest.mark.parametrize("email", ["test@example.com", "user.name@domain.co.uk", "user+label@domain.com"])
def test_valid_emails(email):
    assert is_valid_email(email)


@pytest.mark.parametrize(
    "email",
    ["invalid-email", "@domain.com", "user@", "user@domain", "", None, "test@example.com\n", " test@example.com"],
)
def test_invalid_emails(email):
    assert not is_valid_email(email)


def test_symbol_validator_checks_directory(directory):
    validator = SymbolValidator(directory)
    assert validator.validate("AAPL") is None
    assert validator.validate("INVALID") == "Invalid company symbol"
    assert directory.exists_calls == ["AAPL", "INVALID"]


def test_symbol_lookup_is_case_sensitive(directory):
    assert SymbolValidator(directory).validate("aapl") == "Invalid company symbol"


@pytest.mark.parametrize("symbol", [None, ""])
def test_blank_symbol_rejected_without_lookup(directory, symbol):
    assert SymbolValidator(directory).validate(symbol) == "Invalid company symbol"
    assert directory.exists_calls == []


def test_unreachable_directory_rejects_symbol(directory_factory):
    directory = directory_factory(available=False)
    assert SymbolValidator(directory).validate("AAPL") == "Invalid company symbol"


def test_valid_request_has_no_errors(validator):
    assert validator.validate("AAPL", "2024-01-01", "2024-01-31", "test@example.com") == {}


def test_all_field_errors_reported_together(validator):
    errors = validator.validate("NOPE", "2024-02-01", "2024-01-01", "bad")
    assert errors == {
        "companySymbol": "Invalid company symbol",
        "startDate": "Start Date must be before or equal to End Date",
        "endDate": "End Date must be after or equal to Start Date",
        "email": "Invalid email format",
    }


def test_build_returns_request_with_parsed_dates(validator):
    request = validator.build("AAPL", "2024-01-01", "2024-01-31T00:00:00.000Z", "test@example.com")
    assert request == StockRequest(
        symbol="AAPL",
        start_date=date(2024, 1, 1),
        end_date=date(2024, 1, 31),
        email="test@example.com",
    )


def test_build_raises_with_field_errors(validator):
    with pytest.raises(ValidationError) as exc:
        validator.build("AAPL", "2024-01-01", "2024-01-31", "not-an-email")
    assert exc.value.errors == {"email": "Invalid email format"}
    assert "email" in str(exc.value)


def test_future_start_also_fails_ordering_on_the_end_side(validator):
    errors = validator.validate("AAPL", "2030-01-01", "2024-01-31", "test@example.com")
    assert errors == {
        "startDate": "Start Date cannot be in the future",
        "endDate": "End Date must be after or equal to Start Date",
    }
