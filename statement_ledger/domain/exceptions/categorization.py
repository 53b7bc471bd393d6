"""Categorization-related domain exceptions."""

from .base import DomainException


class CategorizationException(DomainException):
    """
    Raised by a categorizer that could not produce a category.

    Categorizers may raise any exception; this one simply carries
    which transaction and which strategy were involved.
    """

    def __init__(self, transaction: str, strategy: str, reason: str):
        super().__init__(
            message=f"categorization failed for {transaction} using {strategy}: {reason}",
            code="CATEGORIZATION_ERROR",
        )
        self.transaction = transaction
        self.strategy = strategy
