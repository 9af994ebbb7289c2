"""
Pytest configuration and fixtures for portfolio ledger tests.

This module provides:
- A snapshot directory written under tmp_path (portfolio, prices,
  transactions, metadata, history and an index series)
- Factory helpers for transactions and price history
- Repository and service fixtures
- An API test client bound to the snapshot directory
"""

import json
from datetime import date, timedelta
from decimal import Decimal
from pathlib import Path
from typing import Any, Optional

import pytest
from fastapi.testclient import TestClient

from cartera.main import app
from cartera.api.deps import get_app_settings
from cartera.config.settings import Settings, reset_settings
from cartera.repositories.filesystem import JsonSnapshotRepository
from cartera.services import AnalysisService, LedgerService, PortfolioService
from cartera.domain.models import HistoryPoint, Transaction, TransactionType


# =============================================================================
# SAMPLE SNAPSHOTS
# =============================================================================

# AAPL and MSFT are reconstructed from transactions; GGAL only exists in the
# portfolio snapshot and falls back to its listed quantity and cost.
SAMPLE_PORTFOLIO = {
    "holdings": [
        {"ticker": "AAPL", "name": "Apple Inc.", "quantity": 6, "avgCost": 100, "currency": "USD"},
        {"ticker": "MSFT", "name": "Microsoft Corp.", "quantity": 5, "avgCost": 300, "currency": "USD"},
        {"ticker": "GGAL", "name": "Grupo Financiero Galicia", "quantity": 100, "avgCost": 2, "currency": "ARS"},
    ]
}

SAMPLE_PRICES = {"prices": {"AAPL": 130, "MSFT": 310, "GGAL": 3}}

SAMPLE_TRANSACTIONS = {
    "transactions": [
        {"ticker": "AAPL", "date": "2024-01-10", "type": "buy", "quantity": 10, "price": 100, "fees": 0},
        {"ticker": "MSFT", "date": "2024-02-01", "type": "buy", "quantity": 5, "price": 300},
        {"ticker": "AAPL", "date": "2024-03-15", "type": "sell", "quantity": 4, "price": 120, "fees": 1},
        {"ticker": "AAPL", "date": "2024-05-20", "type": "dividend", "cash": 12},
        {"ticker": "MSFT", "date": "2024-06-01", "type": "dividend", "cash": 5},
    ]
}

SAMPLE_METADATA = {
    "metadata": {
        "AAPL": {"sector": "Technology", "country": "US"},
        "MSFT": {"sector": "Technology", "country": "US"},
        "GGAL": {"sector": "Financials"},
    }
}

SAMPLE_HISTORY = {
    "history": {
        "AAPL": [
            {"date": "2024-06-24", "close": 100},
            {"date": "2024-06-25", "close": 102},
            {"date": "2024-06-26", "close": 101},
            {"date": "2024-06-27", "close": 105},
        ],
        "MSFT": [
            {"date": "2024-06-24", "close": 100},
            {"date": "2024-06-25", "close": 102},
            {"date": "2024-06-26", "close": 101},
            {"date": "2024-06-27", "close": 105},
        ],
        "GGAL": [
            {"date": "2024-06-24", "close": 3},
            {"date": "2024-06-25", "close": 3},
            {"date": "2024-06-26", "close": 3},
            {"date": "2024-06-27", "close": 3},
        ],
    }
}

SAMPLE_CCL = {
    "source": "argentinadatos",
    "updatedAt": "2024-06-28",
    "from": "2024-06-26",
    "to": "2024-06-28",
    "series": [
        {"date": "2024-06-26", "value": 1295.5},
        {"date": "2024-06-27", "value": 1301.25},
        {"date": "2024-06-28", "value": 1310},
    ],
}


def write_snapshot(directory: Path, name: str, payload: Any) -> Path:
    """Write one ``<name>.json`` snapshot file."""
    path = directory / f"{name}.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


# =============================================================================
# TIME FIXTURES
# =============================================================================


@pytest.fixture
def fixed_today() -> date:
    """Fixed 'today' for deterministic period and lot tests."""
    return date(2024, 6, 30)


# =============================================================================
# SNAPSHOT FIXTURES
# =============================================================================


@pytest.fixture
def snapshot_dir(tmp_path) -> Path:
    """Snapshot directory with every sample file."""
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    write_snapshot(data_dir, "portfolio", SAMPLE_PORTFOLIO)
    write_snapshot(data_dir, "prices", SAMPLE_PRICES)
    write_snapshot(data_dir, "transactions", SAMPLE_TRANSACTIONS)
    write_snapshot(data_dir, "metadata", SAMPLE_METADATA)
    write_snapshot(data_dir, "history", SAMPLE_HISTORY)
    write_snapshot(data_dir, "ccl", SAMPLE_CCL)
    return data_dir


@pytest.fixture
def minimal_snapshot_dir(tmp_path) -> Path:
    """Snapshot directory with only the required files."""
    data_dir = tmp_path / "minimal"
    data_dir.mkdir()
    write_snapshot(data_dir, "portfolio", SAMPLE_PORTFOLIO)
    write_snapshot(data_dir, "prices", SAMPLE_PRICES)
    write_snapshot(data_dir, "transactions", SAMPLE_TRANSACTIONS)
    return data_dir


# =============================================================================
# REPOSITORY AND SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def snapshot_repo(snapshot_dir) -> JsonSnapshotRepository:
    """Provide test SnapshotRepository."""
    return JsonSnapshotRepository(snapshot_dir)


@pytest.fixture
def portfolio_service(snapshot_repo) -> PortfolioService:
    """Provide test PortfolioService."""
    return PortfolioService(snapshot_repo=snapshot_repo, ticker_page_size=5)


@pytest.fixture
def ledger_service(snapshot_repo) -> LedgerService:
    """Provide test LedgerService."""
    return LedgerService(snapshot_repo=snapshot_repo, page_size=20, max_compare_periods=3)


@pytest.fixture
def analysis_service(snapshot_repo) -> AnalysisService:
    """Provide test AnalysisService."""
    return AnalysisService(snapshot_repo=snapshot_repo)


# =============================================================================
# API TEST CLIENT FIXTURES
# =============================================================================


def _client_for(data_dir: Path):
    reset_settings()
    settings = Settings(data_dir=data_dir)
    app.dependency_overrides[get_app_settings] = lambda: settings
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    reset_settings()


@pytest.fixture
def client(snapshot_dir) -> TestClient:
    """Provide FastAPI test client reading the sample snapshots."""
    yield from _client_for(snapshot_dir)


@pytest.fixture
def minimal_client(minimal_snapshot_dir) -> TestClient:
    """Provide FastAPI test client without optional snapshots."""
    yield from _client_for(minimal_snapshot_dir)


@pytest.fixture
def empty_client(tmp_path) -> TestClient:
    """Provide FastAPI test client pointed at a directory with no snapshots."""
    yield from _client_for(tmp_path)


# =============================================================================
# HELPER FUNCTIONS (exported for use in tests)
# =============================================================================


def assert_decimal_equal(
    actual: Decimal,
    expected: Decimal,
    tolerance: Decimal = Decimal("0.01"),
) -> None:
    """Assert two Decimals are equal within tolerance."""
    diff = abs(Decimal(actual) - Decimal(expected))
    assert diff <= tolerance, f"Expected {expected}, got {actual} (diff={diff})"


def buy(
    ticker: str,
    day: date,
    quantity: Optional[str],
    price: Optional[str],
    fees: Optional[str] = None,
) -> Transaction:
    """Helper to create a buy transaction."""
    return Transaction(
        ticker=ticker,
        date=day,
        txn_type=TransactionType.BUY,
        quantity=Decimal(quantity) if quantity is not None else None,
        price=Decimal(price) if price is not None else None,
        fees=Decimal(fees) if fees is not None else None,
    )


def sell(
    ticker: str,
    day: date,
    quantity: Optional[str],
    price: Optional[str],
    fees: Optional[str] = None,
) -> Transaction:
    """Helper to create a sell transaction."""
    return Transaction(
        ticker=ticker,
        date=day,
        txn_type=TransactionType.SELL,
        quantity=Decimal(quantity) if quantity is not None else None,
        price=Decimal(price) if price is not None else None,
        fees=Decimal(fees) if fees is not None else None,
    )


def dividend(ticker: str, day: date, cash: Optional[str]) -> Transaction:
    """Helper to create a dividend transaction."""
    return Transaction(
        ticker=ticker,
        date=day,
        txn_type=TransactionType.DIVIDEND,
        cash=Decimal(cash) if cash is not None else None,
    )


def history_series(closes: list[float], start: date = date(2024, 1, 1)) -> list[HistoryPoint]:
    """Helper to build consecutive daily closes."""
    return [
        HistoryPoint(date=start + timedelta(days=i), close=float(close))
        for i, close in enumerate(closes)
    ]
