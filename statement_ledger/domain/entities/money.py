"""Money value object: a decimal amount tied to a currency code."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import IntEnum
from typing import Union

from statement_ledger.domain.exceptions import (
    CurrencyMismatchException,
    MoneyParseException,
)

Number = Union[Decimal, int, str]


class Ordering(IntEnum):
    """Result of comparing two Money values."""

    LESS = -1
    EQUAL = 0
    GREATER = 1


@dataclass(frozen=True)
class Money:
    """
    Immutable monetary value.

    Arithmetic between two Money values requires identical currency
    codes (case-sensitive; an empty code is a valid currency equal only
    to itself). A mismatch raises CurrencyMismatchException and never
    coerces. Every operation returns a new value.

    Attributes:
        amount: Arbitrary-precision decimal amount
        currency: Currency code, e.g. "CHF"
    """

    amount: Decimal
    currency: str

    @classmethod
    def of(cls, amount: Number, currency: str) -> "Money":
        """Create Money from a Decimal, int or numeric string."""
        if isinstance(amount, str):
            return cls.parse(amount, currency)
        return cls(amount=Decimal(amount), currency=currency)

    @classmethod
    def from_float(cls, amount: float, currency: str) -> "Money":
        """
        Create Money from a float.

        Lossy: goes through the shortest repr of the float, so 0.1 becomes
        Decimal("0.1"), but values that were already imprecise stay so.
        Kept for legacy callers only.
        """
        return cls(amount=Decimal(repr(float(amount))), currency=currency)

    @classmethod
    def parse(cls, text: str, currency: str | None = None) -> "Money":
        """
        Parse a decimal string.

        When currency is None the text may carry it as a trailing token,
        so that Money.parse(str(money)) round-trips.

        Raises:
            MoneyParseException: If the amount is not a decimal number
        """
        raw = text.strip()
        if currency is None:
            parts = raw.split()
            # "1 000" is a malformed amount, not 1 in currency "000"
            if len(parts) == 2 and parts[1].isalpha():
                raw, currency = parts
            else:
                currency = ""
        try:
            value = Decimal(raw)
        except InvalidOperation:
            raise MoneyParseException(text)
        if not value.is_finite():
            raise MoneyParseException(text)
        return cls(amount=value, currency=currency)

    @classmethod
    def zero(cls, currency: str) -> "Money":
        """Zero amount in the given currency."""
        return cls(amount=Decimal("0"), currency=currency)

    # ------------------------------------------------------------------
    # Predicates
    # ------------------------------------------------------------------

    def is_zero(self) -> bool:
        return self.amount.is_zero()

    def is_positive(self) -> bool:
        return self.amount > 0

    def is_negative(self) -> bool:
        return self.amount < 0

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def _check_currency(self, other: "Money", operation: str) -> None:
        if self.currency != other.currency:
            raise CurrencyMismatchException(operation, self.currency, other.currency)

    def add(self, other: "Money") -> "Money":
        """Add two amounts of the same currency."""
        self._check_currency(other, "add")
        return Money(self.amount + other.amount, self.currency)

    def subtract(self, other: "Money") -> "Money":
        """Subtract two amounts of the same currency."""
        self._check_currency(other, "subtract")
        return Money(self.amount - other.amount, self.currency)

    def multiply(self, factor: Number) -> "Money":
        """Scale by a unitless factor."""
        return Money(self.amount * Decimal(factor), self.currency)

    def divide(self, divisor: Number) -> "Money":
        """Divide by a unitless divisor (a zero divisor raises ZeroDivisionError)."""
        value = Decimal(divisor)
        if value.is_zero():
            raise ZeroDivisionError("Money division by zero")
        return Money(self.amount / value, self.currency)

    def abs(self) -> "Money":
        return Money(abs(self.amount), self.currency)

    def negate(self) -> "Money":
        return Money(-self.amount, self.currency)

    def __add__(self, other: "Money") -> "Money":
        return self.add(other)

    def __sub__(self, other: "Money") -> "Money":
        return self.subtract(other)

    def __neg__(self) -> "Money":
        return self.negate()

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def compare(self, other: "Money") -> Ordering:
        """
        Order two amounts of the same currency.

        Raises:
            CurrencyMismatchException: If the currencies differ
        """
        self._check_currency(other, "compare")
        if self.amount < other.amount:
            return Ordering.LESS
        if self.amount > other.amount:
            return Ordering.GREATER
        return Ordering.EQUAL

    def equals(self, other: "Money") -> bool:
        """Same amount and same currency; there is no cross-currency equality."""
        return self.currency == other.currency and self.amount == other.amount

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def to_string(self, places: int = 2) -> str:
        """Render with a fixed number of decimal places and the currency code."""
        rounded = self.amount.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
        return f"{rounded:.{places}f} {self.currency}"

    def to_float(self) -> float:
        """Amount as float (lossy, legacy)."""
        return float(self.amount)

    def __str__(self) -> str:
        return self.to_string(2)
