"""CategorizedTransaction: a transaction with parties plus its category."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Dict, Optional

from .category import UNCATEGORIZED
from .direction import Direction
from .money import Money
from .party import Party
from .transaction_core import TransactionCore
from .transaction_with_parties import TransactionWithParties


@dataclass(frozen=True)
class CategorizedTransaction:
    """
    A TransactionWithParties embedded with categorization data.

    Attributes:
        parties: The underlying transaction and its parties
        category: Spending category, "Uncategorized" until assigned
        type: Transaction or investment type (e.g. "Buy")
        fund: Fund name for investment transactions
    """

    parties: TransactionWithParties = field(default_factory=TransactionWithParties)
    category: str = UNCATEGORIZED
    type: str = ""
    fund: str = ""

    @classmethod
    def from_parties(cls, parties: TransactionWithParties) -> "CategorizedTransaction":
        return cls(parties=parties)

    # Delegated facts

    @property
    def core(self) -> TransactionCore:
        return self.parties.core

    @property
    def id(self) -> str:
        return self.parties.id

    @property
    def date(self) -> Optional[date]:
        return self.parties.date

    @property
    def value_date(self) -> Optional[date]:
        return self.parties.value_date

    @property
    def amount(self) -> Money:
        return self.parties.amount

    @property
    def description(self) -> str:
        return self.parties.description

    @property
    def status(self) -> str:
        return self.parties.status

    @property
    def reference(self) -> str:
        return self.parties.reference

    @property
    def payer(self) -> Party:
        return self.parties.payer

    @property
    def payee(self) -> Party:
        return self.parties.payee

    @property
    def direction(self) -> Direction:
        return self.parties.direction

    def is_debit(self) -> bool:
        return self.parties.is_debit()

    def is_credit(self) -> bool:
        return self.parties.is_credit()

    def get_counterparty(self) -> Party:
        return self.parties.get_counterparty()

    # Categorization

    def is_categorized(self) -> bool:
        return self.category != "" and self.category != UNCATEGORIZED

    def has_type(self) -> bool:
        return self.type != ""

    def has_fund(self) -> bool:
        return self.fund != ""

    def with_category(self, category: str) -> "CategorizedTransaction":
        return replace(self, category=category)

    def with_type(self, type: str) -> "CategorizedTransaction":
        return replace(self, type=type)

    def with_fund(self, fund: str) -> "CategorizedTransaction":
        return replace(self, fund=fund)

    def categorize(self, category: str, type: str = "", fund: str = "") -> "CategorizedTransaction":
        """Set category, type and fund in one step."""
        return replace(self, category=category, type=type, fund=fund)

    def reset_categorization(self) -> "CategorizedTransaction":
        return replace(self, category=UNCATEGORIZED, type="", fund="")

    def category_info(self) -> Dict[str, str]:
        """Non-empty categorization fields as a dict."""
        info = {}
        if self.category:
            info["category"] = self.category
        if self.type:
            info["type"] = self.type
        if self.fund:
            info["fund"] = self.fund
        return info
