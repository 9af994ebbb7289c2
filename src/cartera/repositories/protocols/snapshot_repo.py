"""Snapshot repository protocol."""

from decimal import Decimal
from typing import Optional, Protocol

from cartera.domain.models import (
    Holding,
    HistoryPoint,
    IndexSeries,
    MetaEntry,
    Transaction,
)


class SnapshotRepository(Protocol):
    """Interface for reading point-in-time portfolio snapshots."""

    def load_holdings(self) -> list[Holding]:
        """Holdings from the portfolio snapshot."""
        ...

    def load_prices(self) -> dict[str, Decimal]:
        """Current price per ticker."""
        ...

    def load_transactions(self) -> list[Transaction]:
        """All transactions, in snapshot order."""
        ...

    def load_metadata(self) -> dict[str, MetaEntry]:
        """Sector and country metadata per ticker."""
        ...

    def load_history(self) -> Optional[dict[str, list[HistoryPoint]]]:
        """Daily closes per ticker; None when no history snapshot exists."""
        ...

    def load_index_series(self, name: str) -> Optional[IndexSeries]:
        """Named index series; None when it has not been downloaded."""
        ...
