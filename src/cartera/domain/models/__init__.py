"""Domain models package."""

from cartera.domain.models.enums import TransactionType, SortKey, SortDirection, GroupKey
from cartera.domain.models.transaction import Transaction
from cartera.domain.models.position import PositionState
from cartera.domain.models.snapshot import (
    Holding,
    MetaEntry,
    HistoryPoint,
    IndexPoint,
    IndexSeries,
    NOT_AVAILABLE,
)

__all__ = [
    "TransactionType",
    "SortKey",
    "SortDirection",
    "GroupKey",
    "Transaction",
    "PositionState",
    "Holding",
    "MetaEntry",
    "HistoryPoint",
    "IndexPoint",
    "IndexSeries",
    "NOT_AVAILABLE",
]
