"""View models for holdings and per-ticker ledger outputs."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from cartera.domain.models import Transaction


@dataclass(frozen=True)
class ComputedTransaction:
    """
    Transaction annotated with its replay P&L.

    pct is None when there is no cost base to measure against (a dividend
    received with no open position), which is distinct from 0%.
    """

    transaction: Transaction
    pnl: Decimal
    pct: Optional[Decimal] = None


@dataclass
class PositionLedger:
    """Replay result for one ticker: computed rows plus terminal aggregates."""

    ticker: str
    current_price: Decimal
    rows: list[ComputedTransaction] = field(default_factory=list)
    quantity: Decimal = field(default_factory=lambda: Decimal("0"))
    avg_cost: Decimal = field(default_factory=lambda: Decimal("0"))
    realized_pnl: Decimal = field(default_factory=lambda: Decimal("0"))
    unrealized_pnl: Decimal = field(default_factory=lambda: Decimal("0"))

    @property
    def total_pnl(self) -> Decimal:
        return self.realized_pnl + self.unrealized_pnl


@dataclass
class HoldingRow:
    """Single row of the holdings table."""

    ticker: str
    name: str
    currency: str
    quantity: Decimal
    avg_cost: Decimal
    current_price: Optional[Decimal]
    value: Decimal
    realized_pnl: Decimal
    unrealized_pnl: Decimal
    pnl: Decimal
    pnl_pct: Optional[Decimal] = None
    from_transactions: bool = False


@dataclass
class HoldingsTable:
    """Holdings table with portfolio totals."""

    rows: list[HoldingRow] = field(default_factory=list)
    total_value: Decimal = field(default_factory=lambda: Decimal("0"))
    total_pnl: Decimal = field(default_factory=lambda: Decimal("0"))


@dataclass
class LotRow:
    """A single buy lot valued at the current price."""

    date: date
    quantity: Decimal
    price: Decimal
    invested: Decimal
    value: Decimal
    pnl: Decimal
    pnl_pct: Decimal
    days_held: int


@dataclass
class LotsView:
    """Buy lots of one ticker with totals."""

    ticker: str
    current_price: Optional[Decimal]
    rows: list[LotRow] = field(default_factory=list)
    total_quantity: Decimal = field(default_factory=lambda: Decimal("0"))
    total_invested: Decimal = field(default_factory=lambda: Decimal("0"))
    total_value: Decimal = field(default_factory=lambda: Decimal("0"))
    total_pnl: Decimal = field(default_factory=lambda: Decimal("0"))
    total_pnl_pct: Decimal = field(default_factory=lambda: Decimal("0"))
