"""
Error taxonomy for the stock report pipeline.

Every failure the pipeline can report derives from StockReportError. The
pipeline stamps ``stage`` on the exception before re-raising it, so callers see
the original error type together with the stage it came from.
"""

from typing import Optional

from stockreport.domain.entities.stock_request import PipelineStage


class StockReportError(Exception):
    """Base class for all pipeline failures."""

    def __init__(self, message: str, stage: Optional[PipelineStage] = None) -> None:
        super().__init__(message)
        self.stage = stage


class ValidationError(StockReportError):
    """One or more request fields were rejected.

    ``errors`` maps the submitted field name to its rejection message.
    """

    def __init__(self, errors: dict[str, str], stage: Optional[PipelineStage] = None) -> None:
        summary = "; ".join(f"{name}: {reason}" for name, reason in errors.items())
        super().__init__(f"Invalid stock request ({summary})", stage=stage)
        self.errors = dict(errors)


class ConfigurationError(StockReportError):
    """A required endpoint, credential or address is not configured."""

    def __init__(self, setting: str, stage: Optional[PipelineStage] = None) -> None:
        super().__init__(f"{setting} is required but not defined.", stage=stage)
        self.setting = setting


class UpstreamError(StockReportError):
    """The series provider could not be reached or answered with a non-success status."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        stage: Optional[PipelineStage] = None,
    ) -> None:
        super().__init__(message, stage=stage)
        self.status_code = status_code


class MalformedPayloadError(StockReportError):
    """The provider answered successfully but the body has an unexpected shape."""


class DeliveryError(StockReportError):
    """The mail transport failed to send the report."""
