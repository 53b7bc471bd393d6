"""Serialization of transactions to and from the canonical CSV layout."""

from .transaction_csv import (
    CSV_COLUMNS,
    read_transactions,
    row_to_transaction,
    transaction_to_row,
    write_transactions,
    write_transactions_to_csv,
)

__all__ = [
    "CSV_COLUMNS",
    "read_transactions",
    "row_to_transaction",
    "transaction_to_row",
    "write_transactions",
    "write_transactions_to_csv",
]
