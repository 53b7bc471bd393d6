"""Domain Entities - Core business objects."""

from .money import Money, Ordering
from .party import Party
from .direction import CREDIT_DEBIT_CREDIT, CREDIT_DEBIT_DEBIT, Direction, resolve_direction
from .category import UNCATEGORIZED, Category
from .transaction_core import TransactionCore, TransactionStatus
from .transaction_with_parties import TransactionWithParties
from .categorized_transaction import CategorizedTransaction
from .transaction import Transaction
from .categorization_stats import SUMMARY_EVENT, CategorizationStats

__all__ = [
    "Money",
    "Ordering",
    "Party",
    "CREDIT_DEBIT_CREDIT",
    "CREDIT_DEBIT_DEBIT",
    "Direction",
    "resolve_direction",
    "UNCATEGORIZED",
    "Category",
    "TransactionCore",
    "TransactionStatus",
    "TransactionWithParties",
    "CategorizedTransaction",
    "Transaction",
    "SUMMARY_EVENT",
    "CategorizationStats",
]
