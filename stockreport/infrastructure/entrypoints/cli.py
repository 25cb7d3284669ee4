"""
Command-line entry point for one-off stock reports.

    stockreport send AAPL 2024-01-01 2024-01-31 someone@example.com
    stockreport check AAPL 2024-01-01 2024-01-31 someone@example.com
    stockreport preview AAPL 2024-01-01 2024-01-31

Exit codes: 0 on success, 1 when the pipeline fails, 2 when validation rejects
the request.
"""

from functools import lru_cache

import typer
from dotenv import load_dotenv

from stockreport.application.services.csv_renderer import render
from stockreport.application.services.date_range_policy import DateRangePolicy, parse_calendar_date
from stockreport.application.use_cases.get_historical_prices import GetHistoricalPricesUseCase
from stockreport.application.use_cases.process_stock_request import StockRequestHook
from stockreport.domain.exceptions import StockReportError, ValidationError
from stockreport.infrastructure.config.settings import Settings
from stockreport.infrastructure.entrypoints.container import build_preview_use_case, build_request_hook
from stockreport.infrastructure.logging_config import configure_logging
from stockreport.infrastructure.secrets.secrets_manager_adapter import bootstrap_secrets

app = typer.Typer(help="Email historical stock prices as CSV.", no_args_is_help=True)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    load_dotenv()
    bootstrap_secrets()
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    return settings


def get_hook() -> StockRequestHook:
    return build_request_hook(get_settings())


def get_preview() -> GetHistoricalPricesUseCase:
    return build_preview_use_case(get_settings())


def _print_errors(errors: dict[str, str]) -> None:
    for name, reason in errors.items():
        typer.echo(f"{name}: {reason}", err=True)


@app.command()
def check(symbol: str, start_date: str, end_date: str, email: str) -> None:
    """Validate a request without fetching or sending anything."""
    errors = get_hook().validator.validate(symbol, start_date, end_date, email)
    if errors:
        _print_errors(errors)
        raise typer.Exit(code=2)
    typer.echo("Request is valid.")


@app.command()
def send(symbol: str, start_date: str, end_date: str, email: str) -> None:
    """Fetch the price history for SYMBOL and email it to EMAIL as CSV."""
    hook = get_hook()
    try:
        request = hook.validator.build(symbol, start_date, end_date, email)
        result = hook.after_change(request, StockRequestHook.CREATE)
    except ValidationError as exc:
        _print_errors(exc.errors)
        raise typer.Exit(code=2)
    except StockReportError as exc:
        stage = exc.stage.value if exc.stage else "setup"
        typer.echo(f"Failed at {stage}: {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo(
        f"Sent {result.record_count} records ({result.bucket}) for {symbol} to {email} "
        f"[{result.delivery.provider_message_id}]"
    )


@app.command()
def preview(symbol: str, start_date: str, end_date: str) -> None:
    """Print the CSV export for SYMBOL instead of emailing it."""
    policy = DateRangePolicy()
    errors = {
        name: reason
        for name, reason in (
            ("startDate", policy.validate_start(start_date, end_date)),
            ("endDate", policy.validate_end(end_date, start_date)),
        )
        if reason
    }
    if errors:
        _print_errors(errors)
        raise typer.Exit(code=2)

    try:
        records = get_preview().execute(symbol, parse_calendar_date(start_date), parse_calendar_date(end_date))
    except StockReportError as exc:
        typer.echo(f"Failed: {exc}", err=True)
        raise typer.Exit(code=1)
    typer.echo(render(records))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
