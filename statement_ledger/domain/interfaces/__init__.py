"""
Domain Interfaces (Ports)
"""

from .categorizer import TransactionCategorizer

__all__ = [
    "TransactionCategorizer",
]
