"""JSON file implementation of SnapshotRepository."""

import json
import logging
import re
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Optional

from cartera.core.exceptions import SnapshotError, ValidationError
from cartera.core.timezone import parse_iso_date
from cartera.domain.models import (
    Holding,
    HistoryPoint,
    IndexPoint,
    IndexSeries,
    MetaEntry,
    Transaction,
    TransactionType,
)

logger = logging.getLogger(__name__)

PORTFOLIO_FILE = "portfolio"
PRICES_FILE = "prices"
TRANSACTIONS_FILE = "transactions"
METADATA_FILE = "metadata"
HISTORY_FILE = "history"

# Names that cannot be read as an index series
CORE_FILES = frozenset({PORTFOLIO_FILE, PRICES_FILE, TRANSACTIONS_FILE, METADATA_FILE, HISTORY_FILE})

DEFAULT_CURRENCY = "USD"

_SERIES_NAME = re.compile(r"^[A-Za-z0-9_-]+$")


def _to_decimal(value: Any) -> Optional[Decimal]:
    """Convert a JSON number (or numeric string) to Decimal; None if absent or not numeric."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


def _section(data: dict, key: str, kind: type, name: str) -> Any:
    """Top-level member of a snapshot; absent means empty, a wrong JSON type is an error."""
    value = data.get(key)
    if value is None:
        return kind()
    if not isinstance(value, kind):
        expected = "an array" if kind is list else "an object"
        raise SnapshotError(name, f"'{key}' must be {expected}")
    return value


def _optional_text(raw: dict, key: str, where: str) -> Optional[str]:
    value = raw.get(key)
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{where}: '{key}' must be a string, got {value!r}")
    return value


def _required_ticker(raw: Any, where: str) -> str:
    if not isinstance(raw, dict):
        raise ValidationError(f"{where} must be an object, got {raw!r}")
    ticker = _optional_text(raw, "ticker", where)
    if ticker is None or not ticker.strip():
        raise ValidationError(f"{where} has no ticker")
    return ticker.strip()


class JsonSnapshotRepository:
    """
    Reads portfolio snapshots from ``<data_dir>/<name>.json`` files.

    Files are re-read on every call; snapshots are point-in-time and never
    written back.
    """

    def __init__(self, data_dir: Path):
        self._data_dir = Path(data_dir)

    def load_holdings(self) -> list[Holding]:
        """Holdings from portfolio.json."""
        data = self._read(PORTFOLIO_FILE, required=True)
        return [
            self._to_holding(raw, index)
            for index, raw in enumerate(_section(data, "holdings", list, PORTFOLIO_FILE))
        ]

    def load_prices(self) -> dict[str, Decimal]:
        """Prices from prices.json; non-numeric entries are skipped."""
        data = self._read(PRICES_FILE, required=True)
        prices: dict[str, Decimal] = {}
        for ticker, raw in _section(data, "prices", dict, PRICES_FILE).items():
            price = _to_decimal(raw)
            if price is None:
                logger.warning("Skipping non-numeric price for %s: %r", ticker, raw)
                continue
            prices[ticker] = price
        return prices

    def load_transactions(self) -> list[Transaction]:
        """Transactions from transactions.json, in file order."""
        data = self._read(TRANSACTIONS_FILE, required=True)
        return [
            self._to_transaction(raw, index)
            for index, raw in enumerate(_section(data, "transactions", list, TRANSACTIONS_FILE))
        ]

    def load_metadata(self) -> dict[str, MetaEntry]:
        """Metadata from metadata.json; a missing file means no metadata."""
        data = self._read(METADATA_FILE, required=False) or {}
        metadata: dict[str, MetaEntry] = {}
        for ticker, raw in _section(data, "metadata", dict, METADATA_FILE).items():
            raw = raw if raw is not None else {}
            if not isinstance(raw, dict):
                raise ValidationError(f"Metadata for {ticker} must be an object, got {raw!r}")
            metadata[ticker] = MetaEntry(
                sector=_optional_text(raw, "sector", f"Metadata for {ticker}"),
                country=_optional_text(raw, "country", f"Metadata for {ticker}"),
            )
        return metadata

    def load_history(self) -> Optional[dict[str, list[HistoryPoint]]]:
        """Daily closes from history.json, or None when the file is absent."""
        data = self._read(HISTORY_FILE, required=False)
        if data is None:
            return None

        history: dict[str, list[HistoryPoint]] = {}
        for ticker, points in _section(data, "history", dict, HISTORY_FILE).items():
            if not isinstance(points, list):
                raise SnapshotError(HISTORY_FILE, f"history for {ticker} must be an array")
            series: list[HistoryPoint] = []
            for raw in points:
                point = self._to_history_point(raw)
                if point is None:
                    logger.warning("Skipping malformed history point for %s: %r", ticker, raw)
                    continue
                series.append(point)
            history[ticker] = series
        return history

    def load_index_series(self, name: str) -> Optional[IndexSeries]:
        """Index series from ``<name>.json`` (e.g. ccl.json), or None when absent or a core snapshot."""
        if not _SERIES_NAME.match(name or ""):
            raise ValidationError(f"Invalid series name: {name!r}")
        file_name = name.lower()
        if file_name in CORE_FILES:
            logger.info("%s is a core snapshot, not an index series", name)
            return None
        data = self._read(file_name, required=False)
        if data is None:
            return None

        points: list[IndexPoint] = []
        for raw in _section(data, "series", list, file_name):
            point = self._to_index_point(raw)
            if point is None:
                logger.warning("Skipping malformed %s point: %r", name, raw)
                continue
            points.append(point)

        return IndexSeries(
            source=_optional_text(data, "source", f"Series {name}") or name,
            updated_at=self._optional_date(data.get("updatedAt")),
            start=self._optional_date(data.get("from")),
            end=self._optional_date(data.get("to")),
            series=points,
        )

    def _read(self, name: str, required: bool) -> Optional[dict]:
        """Read and decode one snapshot file."""
        path = self._data_dir / f"{name}.json"
        if not path.is_file():
            if required:
                raise SnapshotError(name, f"file not found at {path}")
            logger.info("Optional snapshot %s not present", name)
            return None

        logger.debug("Loading snapshot %s", path)
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise SnapshotError(name, str(e))

        if not isinstance(data, dict):
            raise SnapshotError(name, "top-level JSON value must be an object")
        return data

    @staticmethod
    def _to_holding(raw: Any, index: int) -> Holding:
        where = f"Holding #{index}"
        ticker = _required_ticker(raw, where)
        return Holding(
            ticker=ticker,
            name=_optional_text(raw, "name", where) or ticker,
            quantity=_to_decimal(raw.get("quantity")) or Decimal("0"),
            avg_cost=_to_decimal(raw.get("avgCost")) or Decimal("0"),
            currency=_optional_text(raw, "currency", where) or DEFAULT_CURRENCY,
        )

    @staticmethod
    def _to_transaction(raw: Any, index: int) -> Transaction:
        where = f"Transaction #{index}"
        ticker = _required_ticker(raw, where)
        type_name = _optional_text(raw, "type", where) or ""
        try:
            txn_type = TransactionType(type_name.strip().lower())
        except ValueError:
            raise ValidationError(f"{where} has unknown type: {raw.get('type')!r}")

        return Transaction(
            ticker=ticker,
            date=parse_iso_date(raw.get("date")),
            txn_type=txn_type,
            quantity=_to_decimal(raw.get("quantity")),
            price=_to_decimal(raw.get("price")),
            cash=_to_decimal(raw.get("cash")),
            fees=_to_decimal(raw.get("fees")),
        )

    @staticmethod
    def _to_history_point(raw: Any) -> Optional[HistoryPoint]:
        if not isinstance(raw, dict):
            return None
        close = _to_decimal(raw.get("close"))
        if close is None:
            return None
        try:
            return HistoryPoint(date=parse_iso_date(raw.get("date")), close=float(close))
        except ValidationError:
            return None

    @staticmethod
    def _to_index_point(raw: Any) -> Optional[IndexPoint]:
        if not isinstance(raw, dict):
            return None
        value = _to_decimal(raw.get("value"))
        if value is None:
            return None
        try:
            return IndexPoint(date=parse_iso_date(raw.get("date")), value=value)
        except ValidationError:
            return None

    @staticmethod
    def _optional_date(value: Any):
        if not value:
            return None
        try:
            return parse_iso_date(value)
        except ValidationError:
            return None
