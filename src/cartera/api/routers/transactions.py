"""Movements ledger endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from cartera.api.deps import get_app_settings, get_ledger_service
from cartera.api.schemas import (
    MovementResponse,
    MovementsResponse,
    PeriodComparisonResponse,
    PeriodResponse,
    PeriodSummaryResponse,
)
from cartera.config.settings import Settings
from cartera.core.periods import resolve_range
from cartera.core.timezone import parse_iso_date, today_local
from cartera.domain.views import LedgerRow, PeriodSummary
from cartera.services import FilterParams, LedgerService

router = APIRouter(prefix="/transactions", tags=["transactions"])


def _movement_to_response(row: LedgerRow) -> MovementResponse:
    txn = row.transaction
    return MovementResponse(
        ticker=txn.ticker,
        date=txn.date,
        txn_type=txn.txn_type,
        quantity=txn.quantity,
        price=txn.price,
        cash=txn.cash,
        fees=txn.fees,
        amount=row.amount,
        pnl=row.pnl,
        pct=row.pct,
    )


def _summary_to_response(summary: PeriodSummary) -> PeriodSummaryResponse:
    return PeriodSummaryResponse(
        period=PeriodResponse(
            key=summary.period.key,
            label=summary.period.label,
            start=summary.period.start,
            end=summary.period.end,
        ),
        realized_pnl=summary.realized_pnl,
        unrealized_pnl=summary.unrealized_pnl,
        total_pnl=summary.total_pnl,
    )


@router.get("", response_model=MovementsResponse)
def list_movements(
    range_key: Optional[str] = Query(None, alias="range", description="Preset: 1w, 1m, 3m, 6m, ytd, 1y, prev-year, all"),
    from_date: Optional[str] = Query(None, alias="from", description="Start date YYYY-MM-DD (overrides the preset start)"),
    to_date: Optional[str] = Query(None, alias="to", description="End date YYYY-MM-DD (defaults to today)"),
    ticker: Optional[str] = Query(None, description="Substring of the ticker or holding name"),
    txn_type: Optional[str] = Query(None, alias="type", description="buy, sell or dividend"),
    qmin: Optional[str] = Query(None),
    qmax: Optional[str] = Query(None),
    pmin: Optional[str] = Query(None),
    pmax: Optional[str] = Query(None),
    amin: Optional[str] = Query(None),
    amax: Optional[str] = Query(None),
    sort: Optional[str] = Query(None, description="date, ticker, type, quantity, price or amount"),
    direction: Optional[str] = Query(None, alias="dir", description="asc or desc"),
    page: int = Query(1),
    settings: Settings = Depends(get_app_settings),
    ledger: LedgerService = Depends(get_ledger_service),
) -> MovementsResponse:
    """
    List movements in a date range with optional filters.

    Numeric bounds accept a comma as decimal separator; malformed bounds are
    ignored. Every row carries the P&L computed by replaying all tickers
    chronologically up to the range end.
    """
    period = resolve_range(
        range_key,
        parse_iso_date(from_date) if from_date else None,
        parse_iso_date(to_date) if to_date else None,
        today_local(settings.timezone),
        settings.history_start,
    )
    params = FilterParams(
        from_date=period.start,
        to_date=period.end,
        ticker=ticker,
        txn_type=txn_type,
        qmin=qmin,
        qmax=qmax,
        pmin=pmin,
        pmax=pmax,
        amin=amin,
        amax=amax,
        sort=sort,
        direction=direction,
    )
    view = ledger.movements(params, page=page, period=period)
    return MovementsResponse(
        items=[_movement_to_response(r) for r in view.page.items],
        page=view.page.page,
        page_size=view.page.page_size,
        total=view.page.total,
        total_pages=view.page.total_pages,
        summary=_summary_to_response(view.summary),
    )


@router.get("/compare", response_model=PeriodComparisonResponse)
def compare_periods(
    periods: str = Query(..., description="Comma-separated preset keys, e.g. 1m,ytd"),
    settings: Settings = Depends(get_app_settings),
    ledger: LedgerService = Depends(get_ledger_service),
) -> PeriodComparisonResponse:
    """Compare realized and unrealized P&L across preset periods."""
    summaries = ledger.compare_periods(periods.split(","), today_local(settings.timezone))
    return PeriodComparisonResponse(periods=[_summary_to_response(s) for s in summaries])
