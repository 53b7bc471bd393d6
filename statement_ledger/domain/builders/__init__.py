"""Builders that assemble domain entities from raw statement values."""

from .transaction_builder import TransactionBuilder

__all__ = ["TransactionBuilder"]
