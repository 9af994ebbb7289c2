"""Pydantic schemas for transaction endpoints."""

import datetime as dt
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from cartera.domain.models.enums import TransactionType


class TransactionResponse(BaseModel):
    """Response schema for a single transaction."""

    ticker: str
    date: dt.date
    txn_type: TransactionType
    quantity: Optional[Decimal] = None
    price: Optional[Decimal] = None
    cash: Optional[Decimal] = None
    fees: Optional[Decimal] = None
    amount: Decimal


class MovementResponse(TransactionResponse):
    """A movements ledger row; pnl/pct come from the cross-ticker replay."""

    pnl: Optional[Decimal] = None
    pct: Optional[Decimal] = None


class PeriodResponse(BaseModel):
    """Resolved date window."""

    key: str
    label: str
    start: dt.date
    end: dt.date


class PeriodSummaryResponse(BaseModel):
    """Response schema for a period's P&L summary."""

    period: PeriodResponse
    realized_pnl: Decimal
    unrealized_pnl: Decimal
    total_pnl: Decimal


class MovementsResponse(BaseModel):
    """Response schema for the filtered movements listing."""

    items: list[MovementResponse]
    page: int = Field(..., ge=1)
    page_size: int
    total: int
    total_pages: int
    summary: PeriodSummaryResponse


class PeriodComparisonResponse(BaseModel):
    """Response schema for side-by-side period summaries."""

    periods: list[PeriodSummaryResponse]
