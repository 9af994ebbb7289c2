"""View models for service outputs."""

from cartera.domain.views.portfolio import (
    ComputedTransaction,
    PositionLedger,
    HoldingRow,
    HoldingsTable,
    LotRow,
    LotsView,
)
from cartera.domain.views.ledger import (
    LedgerRow,
    Page,
    PeriodSummary,
    MovementsView,
)
from cartera.domain.views.analysis import (
    GroupRow,
    AllocationView,
    CorrelationCell,
    CorrelationView,
)

__all__ = [
    "ComputedTransaction",
    "PositionLedger",
    "HoldingRow",
    "HoldingsTable",
    "LotRow",
    "LotsView",
    "LedgerRow",
    "Page",
    "PeriodSummary",
    "MovementsView",
    "GroupRow",
    "AllocationView",
    "CorrelationCell",
    "CorrelationView",
]
