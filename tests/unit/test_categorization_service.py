"""
Unit Tests for the categorization service.

These tests verify:
1. Outcome counting for success, failure and no-match
2. Graceful degradation without a categorizer or a usable name
3. Lookup-name fallback order and categorizer arguments
4. Batch behaviour: order, copies and a single summary event
"""

from decimal import Decimal

import pytest
from prometheus_client import REGISTRY

from statement_ledger.application.services import (
    CategorizationService,
    lookup_name,
    process_transactions_with_categorization_stats,
)
from statement_ledger.domain.entities import (
    SUMMARY_EVENT,
    UNCATEGORIZED,
    CategorizationStats,
    Transaction,
)


def summary_events(events):
    return [e for e in events if e["event"] == SUMMARY_EVENT]


def make_service(categorizer=None, logger=None) -> CategorizationService:
    return CategorizationService(categorizer=categorizer, logger=logger, record_metrics=False)


# =============================================================================
# Batch Outcomes
# =============================================================================

class TestBatchOutcomes:
    """Tests for the counters produced by a batch."""

    def test_failing_categorizer_counts_failed(
        self, failing_categorizer, transaction_factory, logger
    ):
        batch = [transaction_factory(number=str(i)) for i in range(5)]

        result = make_service(failing_categorizer, logger).categorize_transactions(batch, "camt")

        assert result.stats == CategorizationStats(total=5, successful=0, failed=5, uncategorized=0)
        assert all(tx.category == UNCATEGORIZED for tx in result.transactions)
        assert failing_categorizer.calls == 5

    def test_empty_category_counts_uncategorized(
        self, categorizer_returning, transaction_factory, logger
    ):
        batch = [transaction_factory() for _ in range(3)]

        result = make_service(categorizer_returning(""), logger).categorize_transactions(batch, "pdf")

        assert result.stats == CategorizationStats(total=3, successful=0, failed=0, uncategorized=3)

    def test_uncategorized_sentinel_counts_uncategorized(
        self, categorizer_returning, transaction_factory, logger
    ):
        result = make_service(categorizer_returning(UNCATEGORIZED), logger).categorize_transactions(
            [transaction_factory()], "pdf"
        )

        assert result.stats.uncategorized == 1
        assert result.stats.successful == 0

    def test_no_categorizer(self, transaction_factory, logger):
        tx = transaction_factory()
        tx.category = "Stale"

        result = make_service(None, logger).categorize_transactions([tx], "revolut")

        assert result.transactions[0].category == UNCATEGORIZED
        assert result.stats == CategorizationStats(total=1, uncategorized=1)

    def test_successful_categorization(self, fixed_categorizer, transaction_factory, logger):
        result = make_service(fixed_categorizer, logger).categorize_transactions(
            [transaction_factory()], "camt"
        )

        assert result.transactions[0].category == "Groceries"
        assert result.stats == CategorizationStats(total=1, successful=1)

    def test_mixed_batch_keeps_invariant(self, keyword_categorizer, transaction_factory, logger):
        batch = [
            transaction_factory(payee="Acme Corp"),
            transaction_factory(payee="Unknown Shop"),
            transaction_factory(payee="boom"),
            transaction_factory(payee="", payer=""),
            transaction_factory(amount="2500", payer="Employer AG", payee="John Doe"),
        ]

        result = make_service(keyword_categorizer, logger).categorize_transactions(batch, "camt")

        assert [tx.category for tx in result.transactions] == [
            "Shopping",
            UNCATEGORIZED,
            UNCATEGORIZED,
            UNCATEGORIZED,
            "Salary",
        ]
        assert result.stats == CategorizationStats(
            total=5, successful=2, failed=1, uncategorized=2
        )
        assert result.stats.is_consistent()

    def test_empty_batch(self, fixed_categorizer, logger, log_events):
        result = make_service(fixed_categorizer, logger).categorize_transactions([], "camt")

        assert result.transactions == []
        assert result.stats.success_rate == 0.0
        assert len(summary_events(log_events)) == 1


# =============================================================================
# Batch Behaviour
# =============================================================================

class TestBatchBehaviour:
    """Tests for ordering, copying and logging."""

    def test_order_preserved(self, fixed_categorizer, transaction_factory, logger):
        batch = [transaction_factory(number=str(i)) for i in range(4)]

        result = make_service(fixed_categorizer, logger).categorize_transactions(batch, "camt")

        assert [tx.number for tx in result.transactions] == ["0", "1", "2", "3"]

    def test_inputs_not_mutated(self, fixed_categorizer, transaction_factory, logger):
        tx = transaction_factory()

        make_service(fixed_categorizer, logger).categorize_transactions([tx], "camt")

        assert tx.category == UNCATEGORIZED

    def test_single_summary_event(self, failing_categorizer, transaction_factory, logger, log_events):
        batch = [transaction_factory() for _ in range(3)]

        make_service(failing_categorizer, logger).categorize_transactions(batch, "selma")

        summaries = summary_events(log_events)
        assert len(summaries) == 1
        assert summaries[0]["parser_type"] == "selma"
        assert summaries[0]["total_transactions"] == 3
        assert summaries[0]["failed"] == 3
        assert summaries[0]["success_rate"] == 0.0

    def test_failure_logged_as_warning(self, failing_categorizer, transaction_factory, logger, log_events):
        make_service(failing_categorizer, logger).categorize_transactions(
            [transaction_factory()], "camt"
        )

        warnings = [e for e in log_events if e["event"] == "categorization_failed"]
        assert len(warnings) == 1
        assert warnings[0]["log_level"] == "warning"
        assert warnings[0]["party_name"] == "Acme Corp"
        assert warnings[0]["error_type"] == "CategorizationException"
        assert "service unavailable" in warnings[0]["error"]

    def test_single_transaction_mutates_in_place(self, fixed_categorizer, transaction_factory, logger, log_events):
        tx = transaction_factory()
        stats = CategorizationStats()

        make_service(fixed_categorizer, logger).categorize_transaction(tx, stats, "camt")

        assert tx.category == "Groceries"
        assert stats == CategorizationStats(total=1, successful=1)
        assert summary_events(log_events) == []


# =============================================================================
# Categorizer Arguments
# =============================================================================

class TestCategorizerArguments:
    """Tests for what the categorizer receives."""

    def test_arguments_for_debit(self, fixed_categorizer, transaction_factory, logger):
        make_service(fixed_categorizer, logger).categorize_transactions(
            [transaction_factory(description="Invoice 17")], "camt"
        )

        assert fixed_categorizer.calls == [
            ("Acme Corp", True, "-100.50", "2025-01-15", "Invoice 17")
        ]

    def test_arguments_for_credit(self, fixed_categorizer, transaction_factory, logger):
        make_service(fixed_categorizer, logger).categorize_transactions(
            [transaction_factory(amount="2500.00", payer="Employer AG", payee="John Doe")],
            "camt",
        )

        name, is_debtor, amount, _, _ = fixed_categorizer.calls[0]
        assert name == "Employer AG"
        assert is_debtor is False
        assert amount == "2500.00"


# =============================================================================
# Lookup Name
# =============================================================================

class TestLookupName:
    """Tests for the lookup-name fallback chain."""

    def base(self, **overrides) -> Transaction:
        values = dict(amount=Decimal("-1"), currency="CHF")
        values.update(overrides)
        return Transaction(**values)

    def test_counterparty_first(self):
        tx = self.base(payee="Acme", party_name="Party", name="Name", recipient="Recipient")

        assert lookup_name(tx) == "Acme"

    def test_party_name_second(self):
        tx = self.base(party_name="Party", name="Name", recipient="Recipient")

        assert lookup_name(tx) == "Party"

    def test_name_third(self):
        assert lookup_name(self.base(name="Name", recipient="Recipient")) == "Name"

    def test_recipient_last(self):
        assert lookup_name(self.base(recipient="Recipient")) == "Recipient"

    def test_all_empty(self):
        assert lookup_name(self.base()) == ""

    def test_missing_name_is_uncategorized_without_call(self, fixed_categorizer, logger):
        result = make_service(fixed_categorizer, logger).categorize_transactions(
            [self.base()], "camt"
        )

        assert fixed_categorizer.calls == []
        assert result.stats.uncategorized == 1


# =============================================================================
# Convenience Function and Metrics
# =============================================================================

class TestProcessTransactions:
    """Tests for process_transactions_with_categorization_stats."""

    def test_returns_categorized_copies(
        self, keyword_categorizer, transaction_factory, logger, log_events
    ):
        batch = [transaction_factory(), transaction_factory(payee="Nobody")]

        result = process_transactions_with_categorization_stats(
            batch, logger, keyword_categorizer, "camt"
        )

        assert [tx.category for tx in result] == ["Shopping", UNCATEGORIZED]
        assert len(summary_events(log_events)) == 1

    def test_without_categorizer(self, transaction_factory):
        result = process_transactions_with_categorization_stats(
            [transaction_factory()], None, None, "camt"
        )

        assert result[0].category == UNCATEGORIZED


class TestServiceMetrics:
    """Tests for the outcome counter."""

    @staticmethod
    def sample(parser_type: str, outcome: str) -> float:
        value = REGISTRY.get_sample_value(
            "statement_ledger_categorization_total",
            {"parser_type": parser_type, "outcome": outcome},
        )
        return value or 0.0

    @pytest.mark.parametrize(
        "categorizer_fixture,outcome",
        [
            ("fixed_categorizer", "successful"),
            ("failing_categorizer", "failed"),
        ],
    )
    def test_outcome_recorded(self, request, categorizer_fixture, outcome, transaction_factory, logger):
        categorizer = request.getfixturevalue(categorizer_fixture)
        before = self.sample("metrics-test", outcome)

        CategorizationService(categorizer, logger, record_metrics=True).categorize_transactions(
            [transaction_factory()], "metrics-test"
        )

        assert self.sample("metrics-test", outcome) == before + 1

    @staticmethod
    def latency_count() -> float:
        value = REGISTRY.get_sample_value("statement_ledger_categorizer_latency_seconds_count")
        return value or 0.0

    def test_disabled_records_nothing(self, fixed_categorizer, transaction_factory, logger):
        before = self.sample("metrics-off", "successful")
        latency_before = self.latency_count()

        make_service(fixed_categorizer, logger).categorize_transactions(
            [transaction_factory()], "metrics-off"
        )

        assert self.sample("metrics-off", "successful") == before
        assert self.latency_count() == latency_before

    def test_enabled_observes_latency(self, fixed_categorizer, transaction_factory, logger):
        before = self.latency_count()

        CategorizationService(fixed_categorizer, logger, record_metrics=True).categorize_transactions(
            [transaction_factory()], "metrics-latency"
        )

        assert self.latency_count() == before + 1
