"""Categorizer interface."""

from abc import ABC, abstractmethod

from statement_ledger.domain.entities import Category


class TransactionCategorizer(ABC):
    """
    Abstract categorizer consumed by the categorization service.

    Implementations may be keyword tables, a local model or a remote
    API. Any timeout or retry policy belongs to the implementation.
    """

    @abstractmethod
    def categorize(
        self,
        party_name: str,
        is_debtor: bool,
        amount: str,
        date: str,
        info: str,
    ) -> Category:
        """
        Assign a category to one transaction.

        Args:
            party_name: Counterparty name used for the lookup
            is_debtor: True when money left the account
            amount: Signed amount as a decimal string
            date: Booking date as YYYY-MM-DD, empty when unknown
            info: Free-text description

        Returns:
            The category; an empty name or "Uncategorized" means no match

        Raises:
            Exception: Any failure; the service counts it and moves on
        """
        ...
