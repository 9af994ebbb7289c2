"""Portfolio engine for reconstructing positions from the transaction ledger."""

from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Iterable, Mapping, Optional, Sequence

from cartera.domain.models import (
    Holding,
    PositionState,
    Transaction,
    TransactionType,
)
from cartera.domain.views import (
    ComputedTransaction,
    HoldingRow,
    HoldingsTable,
    LotRow,
    LotsView,
    PositionLedger,
)

ZERO = Decimal("0")
ONE = Decimal("1")


def sort_chronologically(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Sort by date ascending; same-day transactions keep their input order."""
    return sorted(transactions, key=lambda t: t.date)


def transactions_for(ticker: str, transactions: Iterable[Transaction]) -> list[Transaction]:
    """Select one ticker's transactions in input order."""
    return [t for t in transactions if t.ticker == ticker]


def apply_transaction(
    state: PositionState,
    txn: Transaction,
    current_price: Decimal,
) -> tuple[PositionState, ComputedTransaction]:
    """
    Apply one transaction to a moving-average position.

    Returns the next state and the transaction annotated with its P&L:
    - buy: mark-to-market of the lot against its own price (unrealized)
    - sell: realized against the pre-trade average cost, net of fees
    - dividend: the cash received (realized)
    Missing quantity, price and fees count as zero.
    """
    quantity = txn.quantity or ZERO
    price = txn.price or ZERO
    fees = txn.fees_or_zero

    if txn.txn_type == TransactionType.BUY:
        total_cost = state.avg_cost * state.quantity + quantity * price + fees
        new_quantity = state.quantity + quantity
        avg_cost = total_cost / new_quantity if new_quantity > 0 else ZERO
        pnl = (current_price - price) * quantity
        pct = (current_price - price) / price if price else ZERO
        next_state = replace(state, quantity=new_quantity, avg_cost=avg_cost)
        return next_state, ComputedTransaction(txn, pnl, pct)

    if txn.txn_type == TransactionType.SELL:
        pnl = (price - state.avg_cost) * quantity - fees
        cost_base = state.avg_cost * quantity
        pct = pnl / cost_base if cost_base else ZERO
        # Average cost of the remaining shares is unchanged by a sale
        next_state = replace(
            state,
            quantity=max(ZERO, state.quantity - quantity),
            realized_pnl=state.realized_pnl + pnl,
        )
        return next_state, ComputedTransaction(txn, pnl, pct)

    cash = txn.cash if txn.cash is not None else ZERO
    cost_base = state.avg_cost * state.quantity
    pct = cash / cost_base if cost_base else None
    next_state = replace(state, realized_pnl=state.realized_pnl + cash)
    return next_state, ComputedTransaction(txn, cash, pct)


def unrealized_pnl(state: PositionState, current_price: Decimal) -> Decimal:
    """Paper P&L of the open quantity at the current price."""
    return (current_price - state.avg_cost) * state.quantity


def replay_positions(
    ticker: str,
    transactions: Sequence[Transaction],
    current_price: Optional[Decimal],
) -> PositionLedger:
    """
    Replay one ticker's transactions into a position ledger.

    Rows are returned in chronological (replay) order.
    """
    price = current_price if current_price is not None else ZERO
    state = PositionState()
    rows: list[ComputedTransaction] = []

    for txn in sort_chronologically(transactions):
        state, row = apply_transaction(state, txn, price)
        rows.append(row)

    return PositionLedger(
        ticker=ticker,
        current_price=price,
        rows=rows,
        quantity=state.quantity,
        avg_cost=state.avg_cost,
        realized_pnl=state.realized_pnl,
        unrealized_pnl=unrealized_pnl(state, price),
    )


def replay_all(
    transactions: Sequence[Transaction],
    prices: Mapping[str, Decimal],
) -> tuple[dict[str, PositionState], list[ComputedTransaction]]:
    """
    Replay every ticker at once in a single chronological pass.

    Returns the final state per ticker and the computed rows in replay order.
    """
    states: dict[str, PositionState] = {}
    rows: list[ComputedTransaction] = []

    for txn in sort_chronologically(transactions):
        state = states.get(txn.ticker, PositionState())
        states[txn.ticker], row = apply_transaction(state, txn, prices.get(txn.ticker, ZERO))
        rows.append(row)

    return states, rows


def holding_row(
    holding: Holding,
    transactions: Sequence[Transaction],
    current_price: Optional[Decimal],
) -> HoldingRow:
    """
    Value one holding.

    Reconstructs the position from the holding's transactions when any exist;
    otherwise falls back to the snapshot quantity and average cost.
    """
    own = transactions_for(holding.ticker, transactions)
    price = current_price if current_price is not None else ZERO

    if own:
        ledger = replay_positions(holding.ticker, own, current_price)
        quantity, avg_cost = ledger.quantity, ledger.avg_cost
        realized, unrealized = ledger.realized_pnl, ledger.unrealized_pnl
    else:
        quantity, avg_cost = holding.quantity, holding.avg_cost
        realized = ZERO
        unrealized = (price - avg_cost) * quantity

    pnl = realized + unrealized
    cost_base = avg_cost * quantity
    return HoldingRow(
        ticker=holding.ticker,
        name=holding.name,
        currency=holding.currency,
        quantity=quantity,
        avg_cost=avg_cost,
        current_price=current_price,
        value=price * quantity,
        realized_pnl=realized,
        unrealized_pnl=unrealized,
        pnl=pnl,
        pnl_pct=pnl / cost_base if cost_base else None,
        from_transactions=bool(own),
    )


def build_holdings_table(
    holdings: Sequence[Holding],
    prices: Mapping[str, Decimal],
    transactions: Sequence[Transaction],
) -> HoldingsTable:
    """Value every holding and total the portfolio."""
    rows = [holding_row(h, transactions, prices.get(h.ticker)) for h in holdings]
    return HoldingsTable(
        rows=rows,
        total_value=sum((r.value for r in rows), ZERO),
        total_pnl=sum((r.pnl for r in rows), ZERO),
    )


def build_lots(
    ticker: str,
    transactions: Sequence[Transaction],
    current_price: Optional[Decimal],
    today: date,
) -> LotsView:
    """
    Value each buy lot of a ticker at the current price.

    Each lot is measured against its own invested amount (quantity * price
    plus fees), independently of the moving average.
    """
    price = current_price if current_price is not None else ZERO
    view = LotsView(ticker=ticker, current_price=current_price)

    buys = [
        t for t in sort_chronologically(transactions_for(ticker, transactions))
        if t.txn_type == TransactionType.BUY
    ]
    for txn in buys:
        quantity = txn.quantity or ZERO
        lot_price = txn.price or ZERO
        invested = quantity * lot_price + txn.fees_or_zero
        value = quantity * price
        pnl = value - invested
        view.rows.append(
            LotRow(
                date=txn.date,
                quantity=quantity,
                price=lot_price,
                invested=invested,
                value=value,
                pnl=pnl,
                pnl_pct=pnl / invested if invested else ZERO,
                days_held=(today - txn.date).days,
            )
        )
        view.total_quantity += quantity
        view.total_invested += invested
        view.total_value += value
        view.total_pnl += pnl

    view.total_pnl_pct = view.total_pnl / (view.total_invested or ONE)
    return view
