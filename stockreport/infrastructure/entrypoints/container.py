"""
Composition Root: wires infrastructure adapters into the application layer.

Shared by the FastAPI app and the CLI. Nothing here talks to the network;
missing settings only surface when the adapter that needs them is used.
"""

from stockreport.application.services.report_dispatcher import ReportDispatcher
from stockreport.application.services.request_validator import RequestValidator
from stockreport.application.use_cases.get_historical_prices import GetHistoricalPricesUseCase
from stockreport.application.use_cases.process_stock_request import (
    ProcessStockRequestUseCase,
    StockRequestHook,
)
from stockreport.domain.exceptions import ConfigurationError
from stockreport.domain.ports.mail_transport_port import IMailTransport
from stockreport.infrastructure.config.settings import Settings
from stockreport.infrastructure.mail.ses_transport import SesMailTransport
from stockreport.infrastructure.mail.smtp_transport import SmtpMailTransport
from stockreport.infrastructure.stock_data.chart_normalizer import YahooChartNormalizer
from stockreport.infrastructure.stock_data.rapidapi_chart_provider import RapidApiChartProvider
from stockreport.infrastructure.symbols.nasdaq_directory import NasdaqSymbolDirectory


def build_mail_transport(settings: Settings) -> IMailTransport:
    if settings.mail_backend == "ses":
        return SesMailTransport(region=settings.aws_region)
    if settings.mail_backend == "smtp":
        return SmtpMailTransport(
            host=settings.smtp_host,
            port=settings.smtp_port,
            user=settings.smtp_user,
            password=settings.smtp_password,
            security=settings.smtp_security,
            timeout=settings.http_timeout,
        )
    raise ConfigurationError("MAIL_BACKEND")


def build_request_hook(settings: Settings) -> StockRequestHook:
    directory = NasdaqSymbolDirectory(settings.nasdaq_api_url, timeout=settings.http_timeout)
    validator = RequestValidator(directory)
    use_case = ProcessStockRequestUseCase(
        validator=validator,
        provider=RapidApiChartProvider(
            url=settings.rapid_api_url,
            api_key=settings.rapid_api_key,
            api_host=settings.api_host,
            timeout=settings.http_timeout,
        ),
        normalizer=YahooChartNormalizer(),
        dispatcher=ReportDispatcher(
            directory=directory,
            transport=build_mail_transport(settings),
            sender=settings.mail_from,
        ),
    )
    return StockRequestHook(validator, use_case)


def build_preview_use_case(settings: Settings) -> GetHistoricalPricesUseCase:
    provider = RapidApiChartProvider(
        url=settings.rapid_api_url,
        api_key=settings.rapid_api_key,
        api_host=settings.api_host,
        timeout=settings.http_timeout,
    )
    return GetHistoricalPricesUseCase(provider, YahooChartNormalizer())
