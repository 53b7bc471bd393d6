"""Money-related domain exceptions."""

from .base import DomainException
from .transaction import ParseException


class CurrencyMismatchException(DomainException):
    """Raised when arithmetic or comparison mixes two currencies."""

    def __init__(self, operation: str, left: str, right: str):
        super().__init__(
            message=f"cannot {operation} different currencies: {left} and {right}",
            code="CURRENCY_MISMATCH",
        )
        self.operation = operation
        self.left = left
        self.right = right


class MoneyParseException(ParseException):
    """Raised when a string is not a valid monetary amount."""

    def __init__(self, value: str):
        super().__init__(field="amount string", value=value, reason="not a decimal number")
