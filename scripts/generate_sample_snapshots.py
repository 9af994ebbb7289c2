#!/usr/bin/env python3
"""
Generate realistic sample snapshots for the last 6 months.
Simulates a user's trading activity with buys, sells and dividends and
writes portfolio, prices, transactions, metadata and history JSON files.

Usage: from project root:
  python scripts/generate_sample_snapshots.py [data_dir]
"""

import json
import random
import sys
from datetime import date, timedelta
from decimal import Decimal
from pathlib import Path

from cartera.config.settings import get_settings
from cartera.domain.models import Transaction, TransactionType
from cartera.services.portfolio_engine import replay_all

# ticker -> (name, approximate price, sector, country, currency)
STOCKS = {
    "AAPL": ("Apple Inc.", 180.0, "Technology", "US", "USD"),
    "MSFT": ("Microsoft Corp.", 420.0, "Technology", "US", "USD"),
    "KO": ("Coca-Cola Co.", 60.0, "Consumer Staples", "US", "USD"),
    "MELI": ("MercadoLibre Inc.", 1700.0, "Consumer Discretionary", "AR", "USD"),
    "GGAL": ("Grupo Financiero Galicia", 3.5, "Financials", "AR", "ARS"),
    "YPF": ("YPF S.A.", 20.0, "Energy", "AR", "USD"),
}

MAX_TRANSACTIONS = 60
DAYS = 180


def _money(value: float, places: int = 2) -> Decimal:
    return Decimal(str(round(value, places)))


def _history(start: date, today: date) -> dict[str, list[dict]]:
    """Random-walk daily closes on weekdays."""
    history = {}
    for ticker, (_, base_price, *_rest) in STOCKS.items():
        price = base_price
        points = []
        day = start
        while day <= today:
            if day.weekday() < 5:
                price = max(0.01, price * (1 + random.gauss(0, 0.015)))
                points.append({"date": day.isoformat(), "close": round(price, 2)})
            day += timedelta(days=1)
        history[ticker] = points
    return history


def _transactions(history: dict[str, list[dict]]) -> list[Transaction]:
    """
    Buys on random history days, some partial sells and dividends.

    Days are drawn first and walked in date order, so a sell or dividend
    only follows a buy of the same ticker.
    """
    transactions: list[Transaction] = []
    held = {ticker: Decimal("0") for ticker in history}

    picks = []
    for _ in range(MAX_TRANSACTIONS):
        ticker = random.choice(list(history))
        picks.append((ticker, random.choice(history[ticker])))
    picks.sort(key=lambda pick: pick[1]["date"])

    for ticker, point in picks:
        day = date.fromisoformat(point["date"])
        price = _money(point["close"])

        if held[ticker] > 0 and random.random() < 0.25:
            quantity = (held[ticker] * _money(random.uniform(0.2, 0.5))).quantize(Decimal("0.0001"))
            txn_type = TransactionType.SELL
            held[ticker] -= quantity
        elif random.random() < 0.1 and held[ticker] > 0:
            cash = (held[ticker] * price * Decimal("0.005")).quantize(Decimal("0.01"))
            transactions.append(Transaction(ticker, day, TransactionType.DIVIDEND, cash=cash))
            continue
        else:
            quantity = _money(random.uniform(1, 20), 4)
            txn_type = TransactionType.BUY
            held[ticker] += quantity

        transactions.append(Transaction(
            ticker, day, txn_type, quantity=quantity, price=price, fees=Decimal("1.00"),
        ))

    return transactions


def _write(data_dir: Path, name: str, payload: dict) -> None:
    path = data_dir / f"{name}.json"
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    print(f"✓ Wrote {path}")


def generate_sample_snapshots(data_dir: Path) -> None:
    """Generate and write every snapshot file."""
    random.seed(42)
    data_dir.mkdir(parents=True, exist_ok=True)

    today = date.today()
    start = today - timedelta(days=DAYS)
    print(f"Generating snapshots from {start} to {today}")
    print("=" * 60)

    history = _history(start, today)
    prices = {ticker: Decimal(str(points[-1]["close"])) for ticker, points in history.items()}
    transactions = _transactions(history)
    states, _ = replay_all(transactions, prices)

    _write(data_dir, "portfolio", {"holdings": [
        {
            "ticker": ticker,
            "name": name,
            "quantity": float(states[ticker].quantity) if ticker in states else 0,
            "avgCost": float(states[ticker].avg_cost.quantize(Decimal("0.01"))) if ticker in states else 0,
            "currency": currency,
        }
        for ticker, (name, _, _, _, currency) in STOCKS.items()
    ]})
    _write(data_dir, "prices", {"prices": {t: float(p) for t, p in prices.items()}})
    _write(data_dir, "transactions", {"transactions": [
        {
            "ticker": t.ticker,
            "date": t.date.isoformat(),
            "type": t.txn_type.value,
            **({"quantity": float(t.quantity)} if t.quantity is not None else {}),
            **({"price": float(t.price)} if t.price is not None else {}),
            **({"cash": float(t.cash)} if t.cash is not None else {}),
            **({"fees": float(t.fees)} if t.fees is not None else {}),
        }
        for t in transactions
    ]})
    _write(data_dir, "metadata", {"metadata": {
        ticker: {"sector": sector, "country": country}
        for ticker, (_, _, sector, country, _) in STOCKS.items()
    }})
    _write(data_dir, "history", {"history": history})

    # Summary
    print("\n" + "=" * 60)
    print("SUMMARY")
    print("=" * 60)
    for txn_type in TransactionType:
        count = sum(1 for t in transactions if t.txn_type == txn_type)
        print(f"  {txn_type.value}: {count}")
    print("\nYou can now:")
    print("  - View holdings: GET /portfolio/holdings")
    print("  - View movements: GET /transactions")
    print("  - View correlations: GET /analysis/correlations")


if __name__ == "__main__":
    target = Path(sys.argv[1]) if len(sys.argv) > 1 else get_settings().get_data_dir()
    generate_sample_snapshots(target)
