"""Analysis service for allocation and correlation analytics."""

import logging
from decimal import Decimal
from typing import Mapping, Optional, Sequence

import pandas as pd

from cartera.core.exceptions import NotFoundError
from cartera.domain.models import (
    GroupKey,
    Holding,
    HistoryPoint,
    IndexSeries,
    MetaEntry,
    NOT_AVAILABLE,
)
from cartera.domain.views import (
    AllocationView,
    CorrelationCell,
    CorrelationView,
    GroupRow,
)
from cartera.repositories.protocols import SnapshotRepository
from cartera.services.stats import clamp_correlation, compute_returns, pearson

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def _group_of(holding: Holding, metadata: Mapping[str, MetaEntry], key: GroupKey) -> str:
    if key == GroupKey.CURRENCY:
        return holding.currency
    meta = metadata.get(holding.ticker)
    value = None
    if meta is not None:
        value = meta.sector if key == GroupKey.SECTOR else meta.country
    return value or NOT_AVAILABLE


def aggregate_by(
    holdings: Sequence[Holding],
    prices: Mapping[str, Decimal],
    metadata: Mapping[str, MetaEntry],
    key: GroupKey,
) -> AllocationView:
    """
    Group holding values by sector, country or currency.

    Value is current price times snapshot quantity (a missing price counts
    as zero). Rows are sorted by weight descending; weights are all zero when
    the portfolio total is zero.
    """
    values: dict[str, Decimal] = {}
    for holding in holdings:
        value = prices.get(holding.ticker, ZERO) * holding.quantity
        group = _group_of(holding, metadata, key)
        values[group] = values.get(group, ZERO) + value

    total = sum(values.values(), ZERO)
    rows = [
        GroupRow(key=group, value=value, weight=value / total if total else ZERO)
        for group, value in values.items()
    ]
    rows.sort(key=lambda r: r.weight, reverse=True)
    return AllocationView(group_by=key, rows=rows, total=total)


def correlation_matrix(
    history: Mapping[str, Sequence[HistoryPoint]],
    tickers: Sequence[str],
) -> list[CorrelationCell]:
    """
    Pairwise correlation of daily returns.

    Covers every unordered pair, self-pairs included, of the tickers with at
    least two history points. Each pair is measured over the dates both
    return series share.
    """
    returns = {}
    for ticker in dict.fromkeys(tickers):
        series = history.get(ticker)
        if series and len(series) >= 2:
            returns[ticker] = compute_returns(series)
    if not returns:
        return []

    # Columns align on date; corr() uses the dates each pair shares
    frame = pd.DataFrame(returns)
    matrix = frame.corr(min_periods=2)

    keys = list(returns)
    cells: list[CorrelationCell] = []
    for i, a in enumerate(keys):
        for b in keys[i:]:
            if a == b:
                r = pearson(returns[a].tolist(), returns[a].tolist())
            else:
                r = clamp_correlation(matrix.at[a, b])
            cells.append(CorrelationCell(a=a, b=b, r=r))
    return cells


class AnalysisService:
    """
    Service for portfolio analytics.

    Computes allocation breakdowns and the return correlation matrix from
    the current snapshots.
    """

    def __init__(self, snapshot_repo: SnapshotRepository):
        self._snapshots = snapshot_repo

    def allocation(self, key: GroupKey) -> AllocationView:
        """Allocation breakdown for one dimension."""
        return aggregate_by(
            self._snapshots.load_holdings(),
            self._snapshots.load_prices(),
            self._snapshots.load_metadata(),
            key,
        )

    def allocations(self) -> list[AllocationView]:
        """Allocation breakdowns by sector, country and currency."""
        holdings = self._snapshots.load_holdings()
        prices = self._snapshots.load_prices()
        metadata = self._snapshots.load_metadata()
        return [aggregate_by(holdings, prices, metadata, key) for key in GroupKey]

    def correlations(self) -> CorrelationView:
        """
        Correlation matrix over the holdings' tickers.

        Reports unavailable (rather than failing) when no history snapshot
        exists or no ticker has enough points.
        """
        history = self._snapshots.load_history()
        if history is None:
            return CorrelationView(available=False)

        tickers = [h.ticker for h in self._snapshots.load_holdings()]
        cells = correlation_matrix(history, tickers)
        return CorrelationView(available=bool(cells), cells=cells)

    def index_series(self, name: str) -> IndexSeries:
        """Externally downloaded index series (e.g. ``ccl``)."""
        series: Optional[IndexSeries] = self._snapshots.load_index_series(name)
        if series is None:
            raise NotFoundError("Index series", name)
        return series
