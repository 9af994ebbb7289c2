"""Pydantic schemas for API responses."""

from cartera.api.schemas.transaction import (
    TransactionResponse,
    MovementResponse,
    PeriodResponse,
    PeriodSummaryResponse,
    MovementsResponse,
    PeriodComparisonResponse,
)
from cartera.api.schemas.portfolio import (
    HoldingResponse,
    HoldingsResponse,
    LedgerRowResponse,
    TickerLedgerResponse,
    LotResponse,
    LotsResponse,
)
from cartera.api.schemas.analysis import (
    GroupResponse,
    AllocationResponse,
    AllocationsResponse,
    CorrelationCellResponse,
    CorrelationResponse,
    IndexPointResponse,
    IndexSeriesResponse,
)

__all__ = [
    "TransactionResponse",
    "MovementResponse",
    "PeriodResponse",
    "PeriodSummaryResponse",
    "MovementsResponse",
    "PeriodComparisonResponse",
    "HoldingResponse",
    "HoldingsResponse",
    "LedgerRowResponse",
    "TickerLedgerResponse",
    "LotResponse",
    "LotsResponse",
    "GroupResponse",
    "AllocationResponse",
    "AllocationsResponse",
    "CorrelationCellResponse",
    "CorrelationResponse",
    "IndexPointResponse",
    "IndexSeriesResponse",
]
