"""Holdings and per-ticker endpoints."""

from fastapi import APIRouter, Depends, Query

from cartera.api.deps import get_app_settings, get_portfolio_service
from cartera.api.schemas import (
    HoldingResponse,
    HoldingsResponse,
    LedgerRowResponse,
    LotResponse,
    LotsResponse,
    TickerLedgerResponse,
)
from cartera.config.settings import Settings
from cartera.core.timezone import today_local
from cartera.services import PortfolioService

router = APIRouter(prefix="/portfolio", tags=["portfolio"])


@router.get("/holdings", response_model=HoldingsResponse)
def get_holdings(
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> HoldingsResponse:
    """Holdings valued at current prices with realized and unrealized P&L."""
    table = portfolio.holdings_table()
    return HoldingsResponse(
        rows=[
            HoldingResponse(
                ticker=r.ticker,
                name=r.name,
                currency=r.currency,
                quantity=r.quantity,
                avg_cost=r.avg_cost,
                current_price=r.current_price,
                value=r.value,
                realized_pnl=r.realized_pnl,
                unrealized_pnl=r.unrealized_pnl,
                pnl=r.pnl,
                pnl_pct=r.pnl_pct,
                from_transactions=r.from_transactions,
            )
            for r in table.rows
        ],
        total_value=table.total_value,
        total_pnl=table.total_pnl,
    )


@router.get("/{ticker}/ledger", response_model=TickerLedgerResponse)
def get_ticker_ledger(
    ticker: str,
    page: int = Query(1, description="Page number; rows are listed most recent first"),
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> TickerLedgerResponse:
    """Replayed ledger of one ticker with its position aggregates."""
    ledger, rows = portfolio.ticker_ledger_page(ticker, page)
    return TickerLedgerResponse(
        ticker=ledger.ticker,
        current_price=ledger.current_price,
        quantity=ledger.quantity,
        avg_cost=ledger.avg_cost,
        realized_pnl=ledger.realized_pnl,
        unrealized_pnl=ledger.unrealized_pnl,
        total_pnl=ledger.total_pnl,
        rows=[
            LedgerRowResponse(
                ticker=c.transaction.ticker,
                date=c.transaction.date,
                txn_type=c.transaction.txn_type,
                quantity=c.transaction.quantity,
                price=c.transaction.price,
                cash=c.transaction.cash,
                fees=c.transaction.fees,
                amount=c.transaction.amount,
                pnl=c.pnl,
                pct=c.pct,
            )
            for c in rows.items
        ],
        page=rows.page,
        page_size=rows.page_size,
        total=rows.total,
        total_pages=rows.total_pages,
    )


@router.get("/{ticker}/lots", response_model=LotsResponse)
def get_ticker_lots(
    ticker: str,
    settings: Settings = Depends(get_app_settings),
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> LotsResponse:
    """Buy lots of one ticker valued at the current price."""
    lots = portfolio.ticker_lots(ticker, today_local(settings.timezone))
    return LotsResponse(
        ticker=lots.ticker,
        current_price=lots.current_price,
        rows=[
            LotResponse(
                date=r.date,
                quantity=r.quantity,
                price=r.price,
                invested=r.invested,
                value=r.value,
                pnl=r.pnl,
                pnl_pct=r.pnl_pct,
                days_held=r.days_held,
            )
            for r in lots.rows
        ],
        total_quantity=lots.total_quantity,
        total_invested=lots.total_invested,
        total_value=lots.total_value,
        total_pnl=lots.total_pnl,
        total_pnl_pct=lots.total_pnl_pct,
    )
