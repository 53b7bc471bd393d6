"""
Shared fixtures for statement-ledger tests.

Provides:
- Builder factory with a fixed currency and metrics disabled
- Stub categorizers (fixed answer, always failing, keyword table)
- Structured log capture
"""

from typing import Dict, List, Optional, Tuple

import pytest
import structlog
from structlog.testing import capture_logs

from statement_ledger.domain.builders import TransactionBuilder
from statement_ledger.domain.entities import Category, Transaction
from statement_ledger.domain.exceptions import CategorizationException
from statement_ledger.domain.interfaces import TransactionCategorizer


# =============================================================================
# Stub Categorizers
# =============================================================================

class FixedCategorizer(TransactionCategorizer):
    """Returns the same category for every transaction and records calls."""

    def __init__(self, name: str, description: str = ""):
        self.category = Category(name=name, description=description)
        self.calls: List[Tuple[str, bool, str, str, str]] = []

    def categorize(self, party_name, is_debtor, amount, date, info) -> Category:
        self.calls.append((party_name, is_debtor, amount, date, info))
        return self.category


class FailingCategorizer(TransactionCategorizer):
    """Raises for every transaction."""

    def __init__(self):
        self.calls = 0

    def categorize(self, party_name, is_debtor, amount, date, info) -> Category:
        self.calls += 1
        raise CategorizationException(party_name, "stub", "service unavailable")


class KeywordCategorizer(TransactionCategorizer):
    """Looks the party name up in a table; unknown names are uncategorized."""

    def __init__(self, table: Dict[str, str]):
        self.table = table

    def categorize(self, party_name, is_debtor, amount, date, info) -> Category:
        if party_name == "boom":
            raise RuntimeError("lookup exploded")
        return Category(name=self.table.get(party_name, ""))


# =============================================================================
# Builders and Transactions
# =============================================================================

@pytest.fixture
def builder_factory():
    """Factory for builders that do not depend on environment settings."""

    def _factory(currency: str = "CHF") -> TransactionBuilder:
        return TransactionBuilder(default_currency=currency, record_metrics=False)

    return _factory


@pytest.fixture
def builder(builder_factory) -> TransactionBuilder:
    return builder_factory()


def make_transaction(
    amount: str = "-100.50",
    payer: str = "John Doe",
    payee: str = "Acme Corp",
    date: str = "2025-01-15",
    description: str = "Card payment",
    currency: str = "CHF",
    number: Optional[str] = None,
) -> Transaction:
    """Build a valid transaction with sensible defaults."""
    b = (
        TransactionBuilder(default_currency=currency, record_metrics=False)
        .with_date(date)
        .with_amount_from_string(amount, currency)
        .with_payer(payer)
        .with_payee(payee)
        .with_description(description)
    )
    if number is not None:
        b = b.with_id(number)
    return b.build()


# =============================================================================
# Categorizers
# =============================================================================

@pytest.fixture
def fixed_categorizer() -> FixedCategorizer:
    return FixedCategorizer("Groceries")


@pytest.fixture
def failing_categorizer() -> FailingCategorizer:
    return FailingCategorizer()


@pytest.fixture
def keyword_categorizer() -> KeywordCategorizer:
    return KeywordCategorizer({"Acme Corp": "Shopping", "Employer AG": "Salary"})


# =============================================================================
# Logging
# =============================================================================

@pytest.fixture
def log_events():
    """Capture structlog events emitted inside the test."""
    with capture_logs() as events:
        yield events


@pytest.fixture
def logger():
    return structlog.get_logger("tests")


@pytest.fixture
def transaction_factory():
    """The make_transaction helper, for tests that need several records."""
    return make_transaction


@pytest.fixture
def categorizer_returning():
    """Factory for a FixedCategorizer answering with the given name."""
    return FixedCategorizer
