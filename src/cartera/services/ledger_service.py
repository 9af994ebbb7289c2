"""Ledger service: filtering, sorting and paging the movements ledger."""

import logging
import math
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Mapping, Optional, Sequence, TypeVar

from cartera.core.exceptions import ValidationError
from cartera.core.periods import DEFAULT_HISTORY_START, Period, resolve_period
from cartera.domain.models import (
    Holding,
    SortDirection,
    SortKey,
    Transaction,
    TransactionType,
)
from cartera.domain.views import (
    ComputedTransaction,
    LedgerRow,
    MovementsView,
    Page,
    PeriodSummary,
)
from cartera.repositories.protocols import SnapshotRepository
from cartera.services.portfolio_engine import replay_all, unrealized_pnl

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
T = TypeVar("T")


@dataclass
class FilterParams:
    """
    Movements query, as received from the query string.

    Numeric bounds stay raw strings; they are parsed leniently by
    ``parse_bound`` so a malformed bound simply does not apply.
    """

    from_date: date
    to_date: date
    ticker: Optional[str] = None
    txn_type: Optional[str] = None
    qmin: Optional[str] = None
    qmax: Optional[str] = None
    pmin: Optional[str] = None
    pmax: Optional[str] = None
    amin: Optional[str] = None
    amax: Optional[str] = None
    sort: Optional[str] = None
    direction: Optional[str] = None


def parse_bound(value: Optional[Any]) -> Optional[Decimal]:
    """
    Parse a numeric filter bound.

    Accepts a comma as decimal separator. Empty, unparseable and non-finite
    values yield None (no bound).
    """
    if value is None:
        return None
    text = str(value).strip().replace(",", ".", 1)
    if not text:
        return None
    try:
        number = Decimal(text)
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


def _within(value: Optional[Decimal], low: Optional[Decimal], high: Optional[Decimal]) -> bool:
    """Range check where an absent value fails any active bound."""
    if low is None and high is None:
        return True
    if value is None:
        return False
    if low is not None and value < low:
        return False
    if high is not None and value > high:
        return False
    return True


def _sort_value(key: SortKey) -> Callable[[LedgerRow], Any]:
    if key == SortKey.TICKER:
        return lambda r: r.transaction.ticker.casefold()
    if key == SortKey.TYPE:
        return lambda r: r.transaction.txn_type.value
    if key == SortKey.QUANTITY:
        return lambda r: r.transaction.quantity or ZERO
    if key == SortKey.PRICE:
        return lambda r: r.transaction.price or ZERO
    if key == SortKey.AMOUNT:
        return lambda r: r.amount
    return lambda r: r.transaction.date


def _parse_sort(sort: Optional[str], direction: Optional[str]) -> tuple[SortKey, SortDirection]:
    try:
        key = SortKey((sort or SortKey.DATE.value).lower())
    except ValueError:
        key = SortKey.DATE
    order = SortDirection.ASC if (direction or "").lower() == "asc" else SortDirection.DESC
    return key, order


def filter_and_sort(
    transactions: Sequence[Transaction],
    holdings: Sequence[Holding],
    params: FilterParams,
) -> list[LedgerRow]:
    """
    Filter transactions for the movements ledger and order the result.

    Pipeline: derive the amount, keep the inclusive date range, match the
    ticker text against symbol or holding name, match the type, apply the
    numeric ranges, then stable-sort by the chosen key and direction.
    """
    name_by_ticker = {h.ticker: h.name for h in holdings}

    start, end = params.from_date, params.to_date
    if start > end:
        start, end = end, start

    needle = (params.ticker or "").strip().lower()
    wanted_type = (params.txn_type or "").strip().lower()
    qmin, qmax = parse_bound(params.qmin), parse_bound(params.qmax)
    pmin, pmax = parse_bound(params.pmin), parse_bound(params.pmax)
    amin, amax = parse_bound(params.amin), parse_bound(params.amax)

    rows: list[LedgerRow] = []
    for txn in transactions:
        row = LedgerRow(transaction=txn, amount=txn.amount)

        if not (start <= txn.date <= end):
            continue
        if needle:
            name = name_by_ticker.get(txn.ticker, "").lower()
            if needle not in txn.ticker.lower() and needle not in name:
                continue
        if wanted_type and txn.txn_type.value != wanted_type:
            continue
        if not _within(txn.quantity, qmin, qmax):
            continue
        if not _within(txn.price, pmin, pmax):
            continue
        if not _within(row.amount, amin, amax):
            continue
        rows.append(row)

    key, order = _parse_sort(params.sort, params.direction)
    # sorted() is stable in both directions, so ties keep input order
    return sorted(rows, key=_sort_value(key), reverse=order == SortDirection.DESC)


def paginate(items: Sequence[T], page: int, page_size: int) -> Page[T]:
    """Slice one page; the page number is clamped to the available range."""
    if page_size < 1:
        raise ValidationError("page_size must be >= 1")
    total = len(items)
    total_pages = max(1, math.ceil(total / page_size))
    current = min(max(1, page), total_pages)
    offset = (current - 1) * page_size
    return Page(
        items=list(items[offset:offset + page_size]),
        page=current,
        page_size=page_size,
        total=total,
        total_pages=total_pages,
    )


def summarize_period(
    transactions: Sequence[Transaction],
    prices: Mapping[str, Decimal],
    period: Period,
) -> tuple[PeriodSummary, list[ComputedTransaction]]:
    """
    Replay every transaction up to the period end and summarize the period.

    Realized P&L counts sells and dividends dated inside the period;
    unrealized P&L is every open position at the end of the replay valued at
    the current prices.
    """
    upto_end = [t for t in transactions if t.date <= period.end]
    states, computed = replay_all(upto_end, prices)

    realized = sum(
        (
            c.pnl for c in computed
            if c.transaction.txn_type != TransactionType.BUY
            and period.start <= c.transaction.date <= period.end
        ),
        ZERO,
    )
    unrealized = sum(
        (unrealized_pnl(state, prices.get(ticker, ZERO)) for ticker, state in states.items()),
        ZERO,
    )
    return PeriodSummary(period=period, realized_pnl=realized, unrealized_pnl=unrealized), computed


class LedgerService:
    """
    Service for the movements ledger.

    Loads snapshots per call and combines the filter engine with the
    cross-ticker replay so each listed movement carries its P&L.
    """

    def __init__(
        self,
        snapshot_repo: SnapshotRepository,
        page_size: int = 20,
        max_compare_periods: int = 3,
        history_start: date = DEFAULT_HISTORY_START,
    ):
        self._snapshots = snapshot_repo
        self._page_size = page_size
        self._max_compare_periods = max_compare_periods
        self._history_start = history_start

    def movements(
        self,
        params: FilterParams,
        page: int = 1,
        period: Optional[Period] = None,
    ) -> MovementsView:
        """Filtered, sorted and paged movements with the period summary."""
        transactions = self._snapshots.load_transactions()
        holdings = self._snapshots.load_holdings()
        prices = self._snapshots.load_prices()

        if period is None:
            start, end = sorted((params.from_date, params.to_date))
            period = Period("custom", "Custom", start, end)

        summary, computed = summarize_period(transactions, prices, period)
        # Both passes share the same Transaction objects
        by_identity = {id(c.transaction): c for c in computed}

        rows = []
        for row in filter_and_sort(transactions, holdings, params):
            match = by_identity.get(id(row.transaction))
            if match is not None:
                row = LedgerRow(row.transaction, row.amount, match.pnl, match.pct)
            rows.append(row)

        logger.debug("Movements %s..%s: %d rows", period.start, period.end, len(rows))
        return MovementsView(
            page=paginate(rows, page, self._page_size),
            summary=summary,
        )

    def compare_periods(self, keys: Sequence[str], today: date) -> list[PeriodSummary]:
        """Summaries for several preset periods side by side."""
        unique = list(dict.fromkeys(k.strip().lower() for k in keys if k and k.strip()))
        if not unique:
            raise ValidationError("At least one period is required")
        if len(unique) > self._max_compare_periods:
            raise ValidationError(
                f"At most {self._max_compare_periods} periods can be compared"
            )

        periods = [resolve_period(k, today, self._history_start) for k in unique]
        transactions = self._snapshots.load_transactions()
        prices = self._snapshots.load_prices()
        return [summarize_period(transactions, prices, p)[0] for p in periods]
