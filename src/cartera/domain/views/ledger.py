"""View models for the movements ledger."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Generic, Optional, TypeVar

from cartera.core.periods import Period
from cartera.domain.models import Transaction

T = TypeVar("T")


@dataclass(frozen=True)
class LedgerRow:
    """Filtered transaction with its derived amount and optional replay P&L."""

    transaction: Transaction
    amount: Decimal
    pnl: Optional[Decimal] = None
    pct: Optional[Decimal] = None


@dataclass
class Page(Generic[T]):
    """One page of a listing."""

    items: list[T] = field(default_factory=list)
    page: int = 1
    page_size: int = 20
    total: int = 0
    total_pages: int = 1


@dataclass
class PeriodSummary:
    """Realized P&L inside a period plus unrealized P&L at its end."""

    period: Period
    realized_pnl: Decimal = field(default_factory=lambda: Decimal("0"))
    unrealized_pnl: Decimal = field(default_factory=lambda: Decimal("0"))

    @property
    def total_pnl(self) -> Decimal:
        return self.realized_pnl + self.unrealized_pnl


@dataclass
class MovementsView:
    """Movements ledger page with its period summary."""

    page: Page[LedgerRow]
    summary: PeriodSummary
