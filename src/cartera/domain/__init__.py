"""Domain layer - pure business models with no external dependencies."""

from cartera.domain.models import (
    Transaction,
    TransactionType,
    PositionState,
    Holding,
    MetaEntry,
    HistoryPoint,
    IndexSeries,
    SortKey,
    SortDirection,
    GroupKey,
)

__all__ = [
    "Transaction",
    "TransactionType",
    "PositionState",
    "Holding",
    "MetaEntry",
    "HistoryPoint",
    "IndexSeries",
    "SortKey",
    "SortDirection",
    "GroupKey",
]
