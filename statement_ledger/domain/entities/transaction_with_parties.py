"""TransactionWithParties: core facts plus payer, payee and direction."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Optional

from .direction import Direction
from .money import Money
from .party import Party
from .transaction_core import TransactionCore


@dataclass(frozen=True)
class TransactionWithParties:
    """
    A TransactionCore embedded with its parties.

    The direction is stored once and every direction-dependent question
    (is_debit, counterparty) reads that single value. It is never
    recomputed from a mix of flags and amount sign.
    """

    core: TransactionCore = field(default_factory=TransactionCore)
    payer: Party = field(default_factory=Party)
    payee: Party = field(default_factory=Party)
    direction: Direction = Direction.UNKNOWN

    @classmethod
    def from_core(cls, core: TransactionCore) -> "TransactionWithParties":
        return cls(core=core)

    # Delegated core facts

    @property
    def id(self) -> str:
        return self.core.id

    @property
    def date(self) -> Optional[date]:
        return self.core.date

    @property
    def value_date(self) -> Optional[date]:
        return self.core.value_date

    @property
    def amount(self) -> Money:
        return self.core.amount

    @property
    def description(self) -> str:
        return self.core.description

    @property
    def status(self) -> str:
        return self.core.status

    @property
    def reference(self) -> str:
        return self.core.reference

    # Direction and counterparty

    def is_debit(self) -> bool:
        return self.direction is Direction.DEBIT

    def is_credit(self) -> bool:
        return self.direction is Direction.CREDIT

    def get_counterparty(self) -> Party:
        """
        The other side of the transaction.

        Payee for a debit (who received the money), payer otherwise.
        UNKNOWN is treated like a credit here.
        """
        if self.direction is Direction.DEBIT:
            return self.payee
        return self.payer

    @property
    def counterparty_name(self) -> str:
        return self.get_counterparty().name

    @property
    def counterparty_account_identifier(self) -> str:
        return self.get_counterparty().account_identifier

    def has_payer(self) -> bool:
        return not self.payer.is_empty()

    def has_payee(self) -> bool:
        return not self.payee.is_empty()

    # Copy helpers

    def with_core(self, core: TransactionCore) -> "TransactionWithParties":
        return replace(self, core=core)

    def with_payer(self, payer: Party) -> "TransactionWithParties":
        return replace(self, payer=payer)

    def with_payee(self, payee: Party) -> "TransactionWithParties":
        return replace(self, payee=payee)

    def with_direction(self, direction: Direction) -> "TransactionWithParties":
        return replace(self, direction=direction)

    def as_debit(self) -> "TransactionWithParties":
        return replace(self, direction=Direction.DEBIT)

    def as_credit(self) -> "TransactionWithParties":
        return replace(self, direction=Direction.CREDIT)

    def with_direction_from_amount(self) -> "TransactionWithParties":
        """Negative amounts are debits, positive credits, zero stays UNKNOWN."""
        if self.amount.is_negative():
            return replace(self, direction=Direction.DEBIT)
        if self.amount.is_positive():
            return replace(self, direction=Direction.CREDIT)
        return replace(self, direction=Direction.UNKNOWN)
