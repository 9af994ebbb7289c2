"""Enumerations for domain models."""

from enum import Enum


class TransactionType(str, Enum):
    """Types of ledger transactions."""

    BUY = "buy"
    SELL = "sell"
    DIVIDEND = "dividend"


class SortKey(str, Enum):
    """Columns the movements ledger can be ordered by."""

    DATE = "date"
    TICKER = "ticker"
    TYPE = "type"
    QUANTITY = "quantity"
    PRICE = "price"
    AMOUNT = "amount"


class SortDirection(str, Enum):
    """Ordering direction for listings."""

    ASC = "asc"
    DESC = "desc"


class GroupKey(str, Enum):
    """Dimensions holdings can be grouped by for allocation."""

    SECTOR = "sector"
    COUNTRY = "country"
    CURRENCY = "currency"
