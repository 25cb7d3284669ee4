"""
Domain entities for a historical-data request and its processing outcome.
Zero external dependencies: pure Python dataclasses only.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional


class PipelineStage(str, Enum):
    VALIDATING = "validating"
    FETCHING = "fetching"
    NORMALIZING = "normalizing"
    RENDERING = "rendering"
    DISPATCHING = "dispatching"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class StockRequest:
    symbol: str
    start_date: date
    end_date: date
    email: str


@dataclass(frozen=True)
class DeliveryResult:
    delivered: bool
    provider_message_id: Optional[str] = None


@dataclass(frozen=True)
class PipelineResult:
    request: StockRequest
    stage: PipelineStage
    bucket: str
    record_count: int
    delivery: DeliveryResult
