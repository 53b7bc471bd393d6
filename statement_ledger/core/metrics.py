"""Prometheus metrics for statement processing.

Business Metrics (data quality):
- statement_ledger_categorization_total: Categorization outcomes by source format
- statement_ledger_transactions_built_total: Transactions produced by the builder

Technical Metrics:
- statement_ledger_categorizer_latency_seconds: Time spent inside the categorizer

Batch runs can push these to a gateway or expose them; a drop in the
successful share is the signal that categorization silently regressed.
"""

import time
from contextlib import contextmanager
from typing import Generator

from prometheus_client import Counter, Histogram, REGISTRY, generate_latest


# =============================================================================
# Business Metrics
# =============================================================================

categorization_total = Counter(
    "statement_ledger_categorization_total",
    "Categorization outcomes per transaction",
    ["parser_type", "outcome"],  # successful, failed, uncategorized
)

transactions_built_total = Counter(
    "statement_ledger_transactions_built_total",
    "Transactions successfully produced by the transaction builder",
)


# =============================================================================
# Technical Metrics
# =============================================================================

categorizer_latency = Histogram(
    "statement_ledger_categorizer_latency_seconds",
    "Time spent in the external categorizer per transaction",
    buckets=[0.001, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)


# =============================================================================
# Helper Functions
# =============================================================================

def record_categorization(parser_type: str, outcome: str) -> None:
    """Record one categorization outcome."""
    categorization_total.labels(parser_type=parser_type, outcome=outcome).inc()


def record_transaction_built() -> None:
    """Record a transaction leaving the builder."""
    transactions_built_total.inc()


@contextmanager
def track_categorizer_latency() -> Generator[None, None, None]:
    """Context manager to track categorizer latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        categorizer_latency.observe(duration)


def get_metrics() -> bytes:
    """Get current metrics in Prometheus format."""
    return generate_latest(REGISTRY)
