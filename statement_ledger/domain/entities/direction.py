"""Transaction direction and its resolution rules."""

from decimal import Decimal
from enum import Enum
from typing import Optional


class Direction(str, Enum):
    """Whether money left or entered the account holder's account."""

    DEBIT = "DEBIT"  # Money out (payments, purchases, withdrawals)
    CREDIT = "CREDIT"  # Money in (salary, refunds, deposits)
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_string(cls, value: str) -> "Direction":
        """Parse DEBIT/DBIT or CREDIT/CRDT; anything else is UNKNOWN."""
        normalized = (value or "").strip().upper()
        if normalized in ("DEBIT", "DBIT"):
            return cls.DEBIT
        if normalized in ("CREDIT", "CRDT"):
            return cls.CREDIT
        return cls.UNKNOWN

    @property
    def is_debit(self) -> bool:
        return self is Direction.DEBIT

    @property
    def is_credit(self) -> bool:
        return self is Direction.CREDIT

    @property
    def code(self) -> str:
        """The statement credit/debit code written to CSV."""
        if self is Direction.DEBIT:
            return CREDIT_DEBIT_DEBIT
        if self is Direction.CREDIT:
            return CREDIT_DEBIT_CREDIT
        return ""


CREDIT_DEBIT_DEBIT = "DBIT"
CREDIT_DEBIT_CREDIT = "CRDT"


def resolve_direction(
    explicit: Direction,
    debit_flag: Optional[bool],
    amount: Decimal,
) -> Direction:
    """
    Resolve a single direction from up to three signals.

    Precedence (first applicable wins):
        1. An explicit direction that is not UNKNOWN
        2. An explicit debit flag (None means "not set")
        3. The amount sign: negative is DEBIT, zero or positive is CREDIT

    The result is never UNKNOWN.
    """
    if explicit is not Direction.UNKNOWN:
        return explicit
    if debit_flag is not None:
        return Direction.DEBIT if debit_flag else Direction.CREDIT
    if amount < 0:
        return Direction.DEBIT
    return Direction.CREDIT
