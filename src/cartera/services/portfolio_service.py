"""Portfolio service: holdings table and per-ticker views from snapshots."""

from datetime import date

from cartera.core.exceptions import NotFoundError
from cartera.domain.views import (
    ComputedTransaction,
    HoldingsTable,
    LotsView,
    Page,
    PositionLedger,
)
from cartera.repositories.protocols import SnapshotRepository
from cartera.services.ledger_service import paginate
from cartera.services.portfolio_engine import (
    build_holdings_table,
    build_lots,
    replay_positions,
    transactions_for,
)


class PortfolioService:
    """
    Computes holdings and per-ticker ledgers from the current snapshots.

    Nothing is cached; every call replays the transaction snapshot.
    """

    def __init__(self, snapshot_repo: SnapshotRepository, ticker_page_size: int = 5):
        self._snapshots = snapshot_repo
        self._ticker_page_size = ticker_page_size

    def holdings_table(self) -> HoldingsTable:
        """Holdings valued at current prices, with total P&L per holding."""
        return build_holdings_table(
            self._snapshots.load_holdings(),
            self._snapshots.load_prices(),
            self._snapshots.load_transactions(),
        )

    def ticker_ledger(self, ticker: str) -> PositionLedger:
        """
        Replay one ticker.

        A ticker held in the portfolio snapshot but without transactions falls
        back to the snapshot quantity and average cost.
        """
        symbol = ticker.strip()
        prices = self._snapshots.load_prices()
        own = transactions_for(symbol, self._snapshots.load_transactions())
        ledger = replay_positions(symbol, own, prices.get(symbol))
        if own:
            return ledger

        holding = next((h for h in self._snapshots.load_holdings() if h.ticker == symbol), None)
        if holding is None:
            raise NotFoundError("Ticker", symbol)
        ledger.quantity = holding.quantity
        ledger.avg_cost = holding.avg_cost
        ledger.unrealized_pnl = (ledger.current_price - holding.avg_cost) * holding.quantity
        return ledger

    def ticker_ledger_page(
        self,
        ticker: str,
        page: int = 1,
    ) -> tuple[PositionLedger, Page[ComputedTransaction]]:
        """Ledger aggregates plus one page of rows, most recent first."""
        ledger = self.ticker_ledger(ticker)
        recent_first = list(reversed(ledger.rows))
        return ledger, paginate(recent_first, page, self._ticker_page_size)

    def ticker_lots(self, ticker: str, today: date) -> LotsView:
        """Buy lots of a ticker valued at the current price."""
        symbol = ticker.strip()
        transactions = self._snapshots.load_transactions()
        if not transactions_for(symbol, transactions):
            raise NotFoundError("Transactions for ticker", symbol)
        prices = self._snapshots.load_prices()
        return build_lots(symbol, transactions, prices.get(symbol), today)
