"""
FastAPI entry point: accepts stock requests over HTTP.

This module plays the record-store role: it validates a submitted request,
triggers the pipeline once on creation and reports the outcome as the request
status. Wiring happens once at import time (Composition Root).

Run locally:
    uvicorn stockreport.infrastructure.entrypoints.fastapi_app:app --reload --port 8000
"""

from dotenv import load_dotenv
from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import BaseModel

load_dotenv()

from stockreport.application.use_cases.process_stock_request import StockRequestHook  # noqa: E402
from stockreport.domain.entities.stock_request import PipelineStage  # noqa: E402
from stockreport.domain.exceptions import (  # noqa: E402
    ConfigurationError,
    StockReportError,
    ValidationError,
)
from stockreport.infrastructure.config.settings import Settings  # noqa: E402
from stockreport.infrastructure.entrypoints.container import build_request_hook  # noqa: E402
from stockreport.infrastructure.logging_config import configure_logging  # noqa: E402
from stockreport.infrastructure.secrets.secrets_manager_adapter import bootstrap_secrets  # noqa: E402

# ---------------------------------------------------------------------------
# Composition Root: secrets first, then settings, then adapters
# ---------------------------------------------------------------------------
bootstrap_secrets()
_settings = Settings.from_env()
configure_logging(_settings.log_level)
_hook = build_request_hook(_settings)

app = FastAPI(title="Stock Report Mailer API")


class StockRequestBody(BaseModel):
    companySymbol: str | None = None
    startDate: str | None = None
    endDate: str | None = None
    email: str | None = None


def get_request_hook() -> StockRequestHook:
    return _hook


def _failure_status(exc: StockReportError) -> int:
    if isinstance(exc, ConfigurationError):
        return 500
    return 502


@app.post("/stock-requests")
def create_stock_request(
    body: StockRequestBody,
    hook: StockRequestHook = Depends(get_request_hook),
):
    """Validate the request, then fetch, render and email the report."""
    try:
        request = hook.validator.build(body.companySymbol, body.startDate, body.endDate, body.email)
    except ValidationError as exc:
        return JSONResponse(status_code=422, content={"status": "rejected", "errors": exc.errors})

    try:
        result = hook.after_change(request, StockRequestHook.CREATE)
    except ValidationError as exc:
        return JSONResponse(status_code=422, content={"status": "rejected", "errors": exc.errors})
    except StockReportError as exc:
        logger.error("Stock request {} failed: {}", request.symbol, exc)
        return JSONResponse(
            status_code=_failure_status(exc),
            content={
                "status": PipelineStage.FAILED.value,
                "stage": exc.stage.value if exc.stage else None,
                "error": type(exc).__name__,
                "detail": str(exc),
            },
        )

    return JSONResponse(
        status_code=201,
        content={
            "status": PipelineStage.COMPLETED.value,
            "symbol": request.symbol,
            "range": result.bucket,
            "records": result.record_count,
            "messageId": result.delivery.provider_message_id,
        },
    )


@app.get("/health")
def health():
    return {"status": "ok"}
