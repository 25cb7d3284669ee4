from datetime import date
from unittest.mock import MagicMock

import httpx
import pytest

from stockreport.application.services.report_dispatcher import ReportDispatcher
from stockreport.application.services.request_validator import RequestValidator
from stockreport.application.use_cases.process_stock_request import (
    ProcessStockRequestUseCase,
    StockRequestHook,
)
from stockreport.domain.entities.stock_request import PipelineStage, StockRequest
from stockreport.domain.exceptions import (
    ConfigurationError,
    DeliveryError,
    MalformedPayloadError,
    UpstreamError,
    ValidationError,
)
from stockreport.domain.ports.stock_data_port import IStockSeriesProvider
from stockreport.infrastructure.stock_data.chart_normalizer import YahooChartNormalizer
from stockreport.infrastructure.stock_data.rapidapi_chart_provider import RapidApiChartProvider

REQUEST = StockRequest(
    symbol="AAPL",
    start_date=date(2024, 1, 1),
    end_date=date(2024, 1, 31),
    email="test@example.com",
)


class StaticProvider(IStockSeriesProvider):
    def __init__(self, payload=None, error=None):
        self.payload = payload
        self.error = error
        self.calls = []

    def fetch(self, symbol, start_date, end_date):
        self.calls.append((symbol, start_date, end_date))
        if self.error is not None:
            raise self.error
        return self.payload


def build_use_case(directory, date_policy, provider, transport, normalizer=None):
    validator = RequestValidator(directory, date_policy)
    return ProcessStockRequestUseCase(
        validator=validator,
        provider=provider,
        normalizer=normalizer or YahooChartNormalizer(),
        dispatcher=ReportDispatcher(directory, transport, sender="reports@example.com"),
    )


def test_end_to_end_requests_one_month_and_mails_csv(directory, date_policy, transport, chart_payload):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=chart_payload)

    provider = RapidApiChartProvider(
        url="https://yh-finance.p.rapidapi.com/stock/v3/get-chart",
        api_key="test-key",
        api_host="yh-finance.p.rapidapi.com",
        client=httpx.Client(transport=httpx.MockTransport(handler)),
    )
    result = build_use_case(directory, date_policy, provider, transport).execute(REQUEST)

    assert len(seen) == 1
    assert seen[0].url.params["range"] == "1mo"
    assert seen[0].url.params["symbol"] == "AAPL"

    assert result.stage == PipelineStage.COMPLETED
    assert result.bucket == "1mo"
    assert result.record_count == 2
    assert result.delivery.delivered is True

    mail = transport.sent[0]
    assert mail.subject == "Apple Inc."
    assert mail.attachments[0].filename == "AAPL_stock_data.csv"
    assert mail.attachments[0].content == (
        "Date,Open,High,Low,Close,Volume\n"
        "2024-01-02,150,155,149,153,1000000\n"
        "2024-01-03,150,155,149,153,1000000"
    )


def test_subject_is_symbol_when_name_lookup_fails(directory, date_policy, transport, chart_payload):
    # existence check passes but the later name lookup is unavailable
    directory.display_name = MagicMock(side_effect=lambda symbol: symbol)
    provider = StaticProvider(payload=chart_payload)

    build_use_case(directory, date_policy, provider, transport).execute(REQUEST)

    assert transport.sent[0].subject == "AAPL"


def test_provider_failure_reported_at_fetching_without_dispatch(directory, date_policy, transport):
    provider = StaticProvider(error=UpstreamError("provider down", status_code=503))
    use_case = build_use_case(directory, date_policy, provider, transport)

    with pytest.raises(UpstreamError) as exc:
        use_case.execute(REQUEST)

    assert exc.value.stage == PipelineStage.FETCHING
    assert transport.sent == []
    assert directory.name_calls == []


def test_unset_endpoint_fails_before_any_network_call(directory, date_policy, transport):
    handler = MagicMock()
    provider = RapidApiChartProvider(
        url=None,
        api_key="test-key",
        client=httpx.Client(transport=httpx.MockTransport(handler)),
    )

    with pytest.raises(ConfigurationError) as exc:
        build_use_case(directory, date_policy, provider, transport).execute(REQUEST)

    assert exc.value.stage == PipelineStage.FETCHING
    assert exc.value.setting == "RAPID_API_URL"
    handler.assert_not_called()
    assert transport.sent == []


def test_malformed_payload_reported_at_normalizing(directory, date_policy, transport):
    provider = StaticProvider(payload={"chart": {"result": [], "error": None}})

    with pytest.raises(MalformedPayloadError) as exc:
        build_use_case(directory, date_policy, provider, transport).execute(REQUEST)

    assert exc.value.stage == PipelineStage.NORMALIZING
    assert len(provider.calls) == 1
    assert transport.sent == []


def test_invalid_request_never_reaches_the_provider(directory_factory, date_policy, transport):
    provider = StaticProvider(payload={})
    directory = directory_factory(names={})

    with pytest.raises(ValidationError) as exc:
        build_use_case(directory, date_policy, provider, transport).execute(REQUEST)

    assert exc.value.stage == PipelineStage.VALIDATING
    assert exc.value.errors == {"companySymbol": "Invalid company symbol"}
    assert provider.calls == []


def test_delivery_failure_reported_at_dispatching(directory, date_policy, transport_factory, chart_payload):
    transport = transport_factory(error=OSError("connection refused"))
    provider = StaticProvider(payload=chart_payload)

    with pytest.raises(DeliveryError) as exc:
        build_use_case(directory, date_policy, provider, transport).execute(REQUEST)

    assert exc.value.stage == PipelineStage.DISPATCHING


def test_unexpected_errors_propagate_unchanged(directory, date_policy, transport, chart_payload):
    normalizer = MagicMock()
    normalizer.normalize.side_effect = RuntimeError("boom")
    provider = StaticProvider(payload=chart_payload)

    with pytest.raises(RuntimeError, match="boom"):
        build_use_case(directory, date_policy, provider, transport, normalizer=normalizer).execute(REQUEST)
    assert transport.sent == []


def test_empty_series_still_sends_header_only_attachment(directory, date_policy, transport, payload_factory):
    provider = StaticProvider(payload=payload_factory([]))

    result = build_use_case(directory, date_policy, provider, transport).execute(REQUEST)

    assert result.record_count == 0
    assert transport.sent[0].attachments[0].content == "Date,Open,High,Low,Close,Volume"


def test_hook_runs_pipeline_on_create_only():
    validator = MagicMock()
    use_case = MagicMock()
    hook = StockRequestHook(validator, use_case)

    assert hook.after_change(REQUEST, "update") is None
    use_case.execute.assert_not_called()

    hook.after_change(REQUEST, "create")
    use_case.execute.assert_called_once_with(REQUEST)


def test_hook_propagates_pipeline_errors():
    use_case = MagicMock()
    use_case.execute.side_effect = UpstreamError("API Error")
    hook = StockRequestHook(MagicMock(), use_case)

    with pytest.raises(UpstreamError, match="API Error"):
        hook.after_change(REQUEST, "create")
