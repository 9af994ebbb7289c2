"""Transaction domain model."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from cartera.domain.models.enums import TransactionType

ZERO = Decimal("0")


@dataclass(frozen=True)
class Transaction:
    """
    Ledger transaction entry from the transactions snapshot.

    Supports: buy, sell, dividend.
    - buy/sell carry quantity and price
    - dividend carries cash
    Numeric fields absent from the snapshot stay None; callers decide per
    computation whether None means zero or "not applicable".
    """

    ticker: str
    date: date
    txn_type: TransactionType
    quantity: Optional[Decimal] = None
    price: Optional[Decimal] = None
    cash: Optional[Decimal] = None
    fees: Optional[Decimal] = None

    def __post_init__(self) -> None:
        if isinstance(self.txn_type, str):
            object.__setattr__(self, "txn_type", TransactionType(self.txn_type.lower()))

    @property
    def fees_or_zero(self) -> Decimal:
        return self.fees if self.fees is not None else ZERO

    @property
    def amount(self) -> Decimal:
        """
        Cash amount of the transaction.

        Dividends report their cash; buys add fees to the gross amount and
        sells subtract them.
        """
        if self.txn_type == TransactionType.DIVIDEND:
            return self.cash if self.cash is not None else ZERO
        gross = (self.quantity or ZERO) * (self.price or ZERO)
        if self.txn_type == TransactionType.BUY:
            return gross + self.fees_or_zero
        return gross - self.fees_or_zero
