"""Application Services - Use case orchestration."""

from .categorization_service import (
    CategorizationResult,
    CategorizationService,
    lookup_name,
    process_transactions_with_categorization_stats,
)

__all__ = [
    "CategorizationResult",
    "CategorizationService",
    "lookup_name",
    "process_transactions_with_categorization_stats",
]
