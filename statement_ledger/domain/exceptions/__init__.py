"""Domain Exceptions - Business rule violations and domain errors."""

from .base import DomainException
from .transaction import ParseException, ValidationException
from .money import CurrencyMismatchException, MoneyParseException
from .categorization import CategorizationException

__all__ = [
    "DomainException",
    "ParseException",
    "ValidationException",
    "CurrencyMismatchException",
    "MoneyParseException",
    "CategorizationException",
]
