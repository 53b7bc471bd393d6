"""TransactionCore: the essential, party-free facts of a transaction."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum
from typing import Optional
from uuid import uuid4

from .money import Money


class TransactionStatus(str, Enum):
    """Booking status of a transaction."""

    COMPLETED = "COMPLETED"
    PENDING = "PENDING"
    FAILED = "FAILED"


@dataclass(frozen=True)
class TransactionCore:
    """
    Immutable core facts of a transaction.

    Attributes:
        id: Unique transaction identifier
        date: Booking date (None when unknown)
        value_date: Value date (None when unknown)
        amount: Signed amount with currency
        description: Free-text description from the statement
        status: Booking status, COMPLETED unless the source says otherwise
        reference: Bank or end-to-end reference
    """

    id: str = field(default_factory=lambda: str(uuid4()))
    date: Optional[date] = None
    value_date: Optional[date] = None
    amount: Money = field(default_factory=lambda: Money.zero(""))
    description: str = ""
    status: str = TransactionStatus.COMPLETED.value
    reference: str = ""

    @classmethod
    def new(cls, id: Optional[str] = None) -> "TransactionCore":
        """Create an empty core with a generated (or given) identifier."""
        if id is None:
            return cls()
        return cls(id=id)

    def is_empty(self) -> bool:
        return self.date is None and self.amount.is_zero() and self.description == ""

    def has_valid_date(self) -> bool:
        return self.date is not None

    def has_valid_value_date(self) -> bool:
        return self.value_date is not None

    @property
    def effective_date(self) -> Optional[date]:
        """The value date when known, otherwise the booking date."""
        if self.value_date is not None:
            return self.value_date
        return self.date

    def is_completed(self) -> bool:
        return self.status == TransactionStatus.COMPLETED

    def is_pending(self) -> bool:
        return self.status == TransactionStatus.PENDING

    def is_failed(self) -> bool:
        return self.status == TransactionStatus.FAILED

    def with_date(self, value: date) -> "TransactionCore":
        return replace(self, date=value)

    def with_value_date(self, value: date) -> "TransactionCore":
        return replace(self, value_date=value)

    def with_amount(self, amount: Money) -> "TransactionCore":
        return replace(self, amount=amount)

    def with_description(self, description: str) -> "TransactionCore":
        return replace(self, description=description)

    def with_status(self, status: str) -> "TransactionCore":
        return replace(self, status=status)

    def with_reference(self, reference: str) -> "TransactionCore":
        return replace(self, reference=reference)
