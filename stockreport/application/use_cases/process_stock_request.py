"""
Use-case: turn one stock request into a CSV report delivered by email.

Stages run strictly in order (validating, fetching, normalizing, rendering,
dispatching). The first failure ends the run: the original exception is
re-raised with its ``stage`` set, and nothing after the failing stage runs.
Depends only on Domain ports and entities: no infrastructure imports.
"""

from contextlib import contextmanager
from typing import Iterator, Optional

from loguru import logger

from stockreport.application.services.csv_renderer import render
from stockreport.application.services.range_bucketer import bucket
from stockreport.application.services.report_dispatcher import ReportDispatcher
from stockreport.application.services.request_validator import RequestValidator
from stockreport.domain.entities.stock_request import PipelineResult, PipelineStage, StockRequest
from stockreport.domain.exceptions import StockReportError
from stockreport.domain.ports.stock_data_port import ISeriesNormalizer, IStockSeriesProvider


class ProcessStockRequestUseCase:
    def __init__(
        self,
        validator: RequestValidator,
        provider: IStockSeriesProvider,
        normalizer: ISeriesNormalizer,
        dispatcher: ReportDispatcher,
    ) -> None:
        self._validator = validator
        self._provider = provider
        self._normalizer = normalizer
        self._dispatcher = dispatcher

    def execute(self, request: StockRequest) -> PipelineResult:
        """Run the full pipeline once for *request*.

        Raises:
            ValidationError, ConfigurationError, UpstreamError,
            MalformedPayloadError, DeliveryError: with ``stage`` set to the
            stage that failed. Any other exception propagates unchanged.
        """
        with self._stage(PipelineStage.VALIDATING, request):
            self._validator.check(request)

        with self._stage(PipelineStage.FETCHING, request):
            range_token = bucket(request.start_date, request.end_date)
            payload = self._provider.fetch(request.symbol, request.start_date, request.end_date)

        with self._stage(PipelineStage.NORMALIZING, request):
            records = self._normalizer.normalize(payload)

        with self._stage(PipelineStage.RENDERING, request):
            export = render(records)

        with self._stage(PipelineStage.DISPATCHING, request):
            delivery = self._dispatcher.dispatch(
                request.email,
                request.symbol,
                request.start_date,
                request.end_date,
                export,
            )

        logger.info(
            "Stock request for {} completed: {} records, range {}",
            request.symbol,
            len(records),
            range_token,
        )
        return PipelineResult(
            request=request,
            stage=PipelineStage.COMPLETED,
            bucket=range_token,
            record_count=len(records),
            delivery=delivery,
        )

    @contextmanager
    def _stage(self, stage: PipelineStage, request: StockRequest) -> Iterator[None]:
        logger.debug("Stock request for {}: {}", request.symbol, stage.value)
        try:
            yield
        except StockReportError as exc:
            exc.stage = stage
            logger.error("Stock request for {} failed at {}: {}", request.symbol, stage.value, exc)
            raise
        except Exception:
            logger.exception("Stock request for {} crashed at {}", request.symbol, stage.value)
            raise


class StockRequestHook:
    """Entry point for the record store: runs the pipeline only when a request is created."""

    CREATE = "create"

    def __init__(self, validator: RequestValidator, use_case: ProcessStockRequestUseCase) -> None:
        self.validator = validator
        self._use_case = use_case

    def after_change(self, request: StockRequest, operation: str) -> Optional[PipelineResult]:
        if operation != self.CREATE:
            logger.debug("Ignoring {!r} of stock request for {}", operation, request.symbol)
            return None
        return self._use_case.execute(request)
