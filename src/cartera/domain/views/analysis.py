"""View models for allocation and correlation analysis."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from cartera.domain.models import GroupKey


@dataclass(frozen=True)
class GroupRow:
    """Aggregated value and weight of one group."""

    key: str
    value: Decimal
    weight: Decimal


@dataclass
class AllocationView:
    """Holdings value grouped by one dimension."""

    group_by: GroupKey
    rows: list[GroupRow] = field(default_factory=list)
    total: Decimal = field(default_factory=lambda: Decimal("0"))


@dataclass(frozen=True)
class CorrelationCell:
    """Pearson correlation of daily returns for a ticker pair; r is None when not computable."""

    a: str
    b: str
    r: Optional[float] = None


@dataclass
class CorrelationView:
    """Correlation matrix cells; available is False when no history exists."""

    available: bool = False
    cells: list[CorrelationCell] = field(default_factory=list)
