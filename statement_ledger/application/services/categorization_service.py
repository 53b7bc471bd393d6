"""Categorization service - assigns categories to parsed transactions."""

from contextlib import nullcontext
from dataclasses import dataclass, field
from typing import Any, List, Optional

import structlog

from statement_ledger.core.config import get_settings
from statement_ledger.core.metrics import record_categorization, track_categorizer_latency
from statement_ledger.domain.entities import UNCATEGORIZED, CategorizationStats, Transaction
from statement_ledger.domain.interfaces import TransactionCategorizer
from statement_ledger.service.normalization import format_iso_date


OUTCOME_SUCCESSFUL = "successful"
OUTCOME_FAILED = "failed"
OUTCOME_UNCATEGORIZED = "uncategorized"


@dataclass
class CategorizationResult:
    """Categorized copies of a batch plus the counters for that batch."""

    transactions: List[Transaction] = field(default_factory=list)
    stats: CategorizationStats = field(default_factory=CategorizationStats)


class CategorizationService:
    """
    Application service for the categorization use case.

    Categorization is best-effort enrichment: a missing categorizer, a
    transaction with no usable name, or a categorizer that raises all
    leave the transaction "Uncategorized" and never fail the batch.
    """

    def __init__(
        self,
        categorizer: Optional[TransactionCategorizer] = None,
        logger: Any = None,
        record_metrics: Optional[bool] = None,
    ):
        self._categorizer = categorizer
        self._logger = logger if logger is not None else structlog.get_logger(__name__)
        self._record_metrics = (
            record_metrics if record_metrics is not None else get_settings().metrics_enabled
        )

    def categorize_transactions(
        self,
        transactions: List[Transaction],
        parser_type: str,
    ) -> CategorizationResult:
        """
        Categorize a batch in input order.

        The caller's records are left untouched; the result holds
        categorized copies. One summary event is logged at the end.

        Args:
            transactions: Records produced by a parser
            parser_type: Source format label used in logs and metrics

        Returns:
            CategorizationResult with the copies and the batch counters
        """
        stats = CategorizationStats()
        processed = []

        for tx in transactions:
            copy = tx.copy()
            self.categorize_transaction(copy, stats, parser_type)
            processed.append(copy)

        stats.log_summary(self._logger, parser_type)
        return CategorizationResult(transactions=processed, stats=stats)

    def categorize_transaction(
        self,
        transaction: Transaction,
        stats: CategorizationStats,
        parser_type: str,
    ) -> None:
        """
        Categorize one record in place and update the given counters.

        Exactly one outcome counter is incremented alongside total.
        """
        stats.increment_total()
        log = self._logger.bind(parser_type=parser_type)

        if self._categorizer is None:
            log.debug("categorizer_missing")
            self._mark(transaction, stats, parser_type, OUTCOME_UNCATEGORIZED)
            return

        party_name = lookup_name(transaction)
        if not party_name:
            log.debug("party_name_missing", description=transaction.description)
            self._mark(transaction, stats, parser_type, OUTCOME_UNCATEGORIZED)
            return

        amount = str(transaction.amount)
        try:
            latency = track_categorizer_latency() if self._record_metrics else nullcontext()
            with latency:
                category = self._categorizer.categorize(
                    party_name,
                    transaction.is_debit(),
                    amount,
                    format_iso_date(transaction.date),
                    transaction.description,
                )
        except Exception as e:
            log.warning(
                "categorization_failed",
                party_name=party_name,
                amount=amount,
                error=str(e),
                error_type=type(e).__name__,
            )
            self._mark(transaction, stats, parser_type, OUTCOME_FAILED)
            return

        name = category.name if category is not None else ""
        if not name or name == UNCATEGORIZED:
            log.debug("categorization_no_match", party_name=party_name)
            self._mark(transaction, stats, parser_type, OUTCOME_UNCATEGORIZED)
            return

        log.debug("transaction_categorized", party_name=party_name, category=name)
        transaction.category = name
        stats.increment_successful()
        if self._record_metrics:
            record_categorization(parser_type, OUTCOME_SUCCESSFUL)

    def _mark(
        self,
        transaction: Transaction,
        stats: CategorizationStats,
        parser_type: str,
        outcome: str,
    ) -> None:
        transaction.category = UNCATEGORIZED
        if outcome == OUTCOME_FAILED:
            stats.increment_failed()
        else:
            stats.increment_uncategorized()
        if self._record_metrics:
            record_categorization(parser_type, outcome)


def lookup_name(transaction: Transaction) -> str:
    """
    Name handed to the categorizer.

    Counterparty first, then party_name, the display name and finally
    the recipient. Empty when all of them are.
    """
    for candidate in (
        transaction.get_party_name(),
        transaction.party_name,
        transaction.name,
        transaction.recipient,
    ):
        if candidate:
            return candidate
    return ""


def process_transactions_with_categorization_stats(
    transactions: List[Transaction],
    logger: Any = None,
    categorizer: Optional[TransactionCategorizer] = None,
    parser_type: str = "",
) -> List[Transaction]:
    """Categorize a batch and return only the categorized copies."""
    service = CategorizationService(categorizer=categorizer, logger=logger)
    return service.categorize_transactions(transactions, parser_type).transactions
