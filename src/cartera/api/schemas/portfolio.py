"""Pydantic schemas for holdings and per-ticker endpoints."""

import datetime as dt
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from cartera.api.schemas.transaction import TransactionResponse


class HoldingResponse(BaseModel):
    """Response schema for a single holdings table row."""

    ticker: str
    name: str
    currency: str
    quantity: Decimal
    avg_cost: Decimal
    current_price: Optional[Decimal] = None
    value: Decimal
    realized_pnl: Decimal
    unrealized_pnl: Decimal
    pnl: Decimal
    # null when there is no cost base
    pnl_pct: Optional[Decimal] = None
    from_transactions: bool


class HoldingsResponse(BaseModel):
    """Response schema for the holdings table."""

    rows: list[HoldingResponse]
    total_value: Decimal
    total_pnl: Decimal


class LedgerRowResponse(TransactionResponse):
    """A per-ticker ledger row with its replay P&L."""

    pnl: Decimal
    pct: Optional[Decimal] = None


class TickerLedgerResponse(BaseModel):
    """Response schema for one ticker's replayed ledger (one page of rows)."""

    ticker: str
    current_price: Decimal
    quantity: Decimal
    avg_cost: Decimal
    realized_pnl: Decimal
    unrealized_pnl: Decimal
    total_pnl: Decimal
    rows: list[LedgerRowResponse]
    page: int
    page_size: int
    total: int
    total_pages: int


class LotResponse(BaseModel):
    """Response schema for a single buy lot."""

    date: dt.date
    quantity: Decimal
    price: Decimal
    invested: Decimal
    value: Decimal
    pnl: Decimal
    pnl_pct: Decimal
    days_held: int


class LotsResponse(BaseModel):
    """Response schema for a ticker's buy lots."""

    ticker: str
    current_price: Optional[Decimal] = None
    rows: list[LotResponse]
    total_quantity: Decimal
    total_invested: Decimal
    total_value: Decimal
    total_pnl: Decimal
    total_pnl_pct: Decimal
