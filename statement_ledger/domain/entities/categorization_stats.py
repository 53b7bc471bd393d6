"""Outcome counters for a categorization run."""

from dataclasses import dataclass
from typing import Any

SUMMARY_EVENT = "Categorization summary"


@dataclass
class CategorizationStats:
    """
    Counts how a batch of transactions fared during categorization.

    Every processed transaction increments total and exactly one of
    successful, failed or uncategorized, so
    successful + failed + uncategorized == total after each transaction.

    An instance has a single owner. Parallel workers each keep their own
    and combine them with merge() (or +) once all of them are done.
    """

    total: int = 0
    successful: int = 0
    failed: int = 0
    uncategorized: int = 0

    def increment_total(self) -> None:
        self.total += 1

    def increment_successful(self) -> None:
        self.successful += 1

    def increment_failed(self) -> None:
        self.failed += 1

    def increment_uncategorized(self) -> None:
        self.uncategorized += 1

    @property
    def success_rate(self) -> float:
        """Successful share in percent, 0.0 for an empty run."""
        if self.total == 0:
            return 0.0
        return self.successful / self.total * 100.0

    def is_consistent(self) -> bool:
        return self.successful + self.failed + self.uncategorized == self.total

    def merge(self, other: "CategorizationStats") -> "CategorizationStats":
        """Sum two independent counters into a new instance."""
        return CategorizationStats(
            total=self.total + other.total,
            successful=self.successful + other.successful,
            failed=self.failed + other.failed,
            uncategorized=self.uncategorized + other.uncategorized,
        )

    def __add__(self, other: "CategorizationStats") -> "CategorizationStats":
        return self.merge(other)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "total_transactions": self.total,
            "successful": self.successful,
            "failed": self.failed,
            "uncategorized": self.uncategorized,
            "success_rate": self.success_rate,
        }

    def log_summary(self, logger: Any, parser_type: str) -> None:
        """
        Emit the "Categorization summary" event.

        Args:
            logger: A structlog-style logger; None skips logging
            parser_type: Label of the source format the batch came from
        """
        if logger is None:
            return

        logger.info(
            SUMMARY_EVENT,
            parser_type=parser_type,
            **self.to_dict(),
        )
