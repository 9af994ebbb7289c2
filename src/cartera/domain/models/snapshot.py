"""Static snapshot models: holdings, metadata and price history."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

NOT_AVAILABLE = "N/D"


@dataclass(frozen=True)
class Holding:
    """
    Holding as listed in the portfolio snapshot.

    quantity/avg_cost are a fallback baseline; positions reconstructed from
    transactions take precedence.
    """

    ticker: str
    name: str
    quantity: Decimal
    avg_cost: Decimal
    currency: str


@dataclass(frozen=True)
class MetaEntry:
    """Classification metadata for a ticker."""

    sector: Optional[str] = None
    country: Optional[str] = None


@dataclass(frozen=True)
class HistoryPoint:
    """Daily close for a ticker."""

    date: date
    close: float


@dataclass(frozen=True)
class IndexPoint:
    """Single observation of an externally sourced index series."""

    date: date
    value: Decimal


@dataclass
class IndexSeries:
    """Index series produced by an external batch download (e.g. CCL rate)."""

    source: str
    updated_at: Optional[date] = None
    start: Optional[date] = None
    end: Optional[date] = None
    series: list[IndexPoint] = field(default_factory=list)
