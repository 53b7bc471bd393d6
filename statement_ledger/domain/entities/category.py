"""Spending category returned by a categorizer."""

from dataclasses import dataclass

UNCATEGORIZED = "Uncategorized"


@dataclass(frozen=True)
class Category:
    """A named spending category, e.g. "Groceries"."""

    name: str
    description: str = ""

    @property
    def is_uncategorized(self) -> bool:
        """True for an empty name or the Uncategorized sentinel."""
        return self.name == "" or self.name == UNCATEGORIZED
