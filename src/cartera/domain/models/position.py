"""Derived per-ticker position state."""

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class PositionState:
    """
    Moving-average position for one ticker.

    Derived by replaying transactions; never persisted.
    """

    quantity: Decimal = field(default_factory=lambda: Decimal("0"))
    avg_cost: Decimal = field(default_factory=lambda: Decimal("0"))
    realized_pnl: Decimal = field(default_factory=lambda: Decimal("0"))
