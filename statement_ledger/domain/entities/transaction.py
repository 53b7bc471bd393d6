"""
Canonical flat Transaction record.

This is the one shape that crosses the CSV boundary. Adapters fill it
through the TransactionBuilder; the layered model (TransactionCore,
TransactionWithParties, CategorizedTransaction) is derived from it and
can be folded back into it.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from .categorized_transaction import CategorizedTransaction
from .direction import Direction, resolve_direction
from .money import Money
from .party import Party
from .transaction_core import TransactionCore
from .transaction_with_parties import TransactionWithParties

if TYPE_CHECKING:
    from statement_ledger.domain.builders import TransactionBuilder

ZERO = Decimal("0")


@dataclass
class Transaction:
    """
    A single canonical transaction, one field per CSV column.

    Field order matches the CSV column order. payer and payee are kept
    alongside (they are not CSV columns) so the display name, recipient
    and party name can be derived from them.

    Direction inputs:
        credit_debit: Explicit direction code ("DBIT", "CRDT" or "")
        debit_flag: Explicit debit flag, None when the source gave none
    The amount sign is the last resort. See the direction property.
    """

    bookkeeping_number: str = ""
    status: str = ""
    date: Optional[date] = None
    value_date: Optional[date] = None
    name: str = ""
    description: str = ""
    remittance_info: str = ""
    party_name: str = ""
    party_iban: str = ""
    amount: Decimal = ZERO
    credit_debit: str = ""
    debit_flag: Optional[bool] = None
    debit: Decimal = ZERO
    credit: Decimal = ZERO
    currency: str = ""
    amount_excl_tax: Decimal = ZERO
    amount_tax: Decimal = ZERO
    tax_rate: Decimal = ZERO
    recipient: str = ""
    investment: str = ""
    number: str = ""
    category: str = ""
    type: str = ""
    fund: str = ""
    number_of_shares: int = 0
    fees: Decimal = ZERO
    iban: str = ""
    entry_reference: str = ""
    reference: str = ""
    account_servicer: str = ""
    bank_tx_code: str = ""
    original_currency: str = ""
    original_amount: Decimal = ZERO
    exchange_rate: Decimal = ZERO
    payer: str = ""
    payee: str = ""

    # ------------------------------------------------------------------
    # Direction
    # ------------------------------------------------------------------

    @property
    def direction(self) -> Direction:
        """
        The single resolved direction of this record.

        Explicit credit/debit code first, then the debit flag, then the
        amount sign. Never UNKNOWN, so is_debit() and is_credit() can not
        both be true.
        """
        return resolve_direction(
            Direction.from_string(self.credit_debit),
            self.debit_flag,
            self.amount,
        )

    def is_debit(self) -> bool:
        return self.direction is Direction.DEBIT

    def is_credit(self) -> bool:
        return self.direction is Direction.CREDIT

    def apply_direction(self, direction: Direction) -> None:
        """Store a resolved direction in both the code and the flag."""
        self.credit_debit = direction.code
        self.debit_flag = direction is Direction.DEBIT

    # ------------------------------------------------------------------
    # Direction-aware party accessors
    # ------------------------------------------------------------------

    def get_counterparty(self) -> str:
        """Payee name for a debit, payer name for a credit."""
        if self.is_debit():
            return self.payee
        return self.payer

    def get_party_name(self) -> str:
        return self.get_counterparty()

    def get_payee(self) -> str:
        """
        Legacy accessor.

        Debit: the payee (who received the funds). Credit: the payer,
        i.e. the party on the other side of an incoming payment.
        """
        if self.is_debit():
            return self.payee
        return self.payer

    def get_payer(self) -> str:
        """
        Legacy accessor.

        Debit: the payer (the account holder). Credit: the payee, i.e.
        the account holder receiving the funds.
        """
        if self.is_debit():
            return self.payer
        return self.payee

    def set_payer_info(self, name: str, iban: str = "") -> None:
        self.payer = name
        if iban:
            self.party_iban = iban

    def set_payee_info(self, name: str, iban: str = "") -> None:
        self.payee = name
        if iban:
            self.party_iban = iban

    # ------------------------------------------------------------------
    # Amounts
    # ------------------------------------------------------------------

    @property
    def money(self) -> Money:
        return Money(self.amount, self.currency)

    def set_amount_from_float(self, amount: float, currency: str) -> None:
        """Lossy legacy setter; prefer Decimal amounts."""
        self.amount = Money.from_float(amount, currency).amount
        self.currency = currency

    # ------------------------------------------------------------------
    # Derived fields
    # ------------------------------------------------------------------

    def update_name_from_parties(self) -> None:
        """Display name is the counterparty name when one is known."""
        counterparty = self.get_counterparty()
        if counterparty:
            self.name = counterparty

    def update_recipient_from_payee(self) -> None:
        if self.payee:
            self.recipient = self.payee

    def update_debit_credit_amounts(self) -> None:
        """Exactly one of debit/credit carries the signed amount."""
        if self.is_debit():
            self.debit = self.amount
            self.credit = ZERO
        else:
            self.credit = self.amount
            self.debit = ZERO

    def update_investment_type_from_legacy_field(self) -> None:
        if not self.investment and self.type:
            self.investment = self.type

    def refresh_derived_fields(self) -> None:
        """
        Recompute every derived field from the primary ones.

        All derived values are computed first and assigned together.
        """
        refreshed = replace(self)
        refreshed.apply_direction(refreshed.direction)
        refreshed.update_name_from_parties()
        refreshed.update_recipient_from_payee()
        refreshed.update_debit_credit_amounts()
        refreshed.update_investment_type_from_legacy_field()

        self.credit_debit = refreshed.credit_debit
        self.debit_flag = refreshed.debit_flag
        self.name = refreshed.name
        self.recipient = refreshed.recipient
        self.debit = refreshed.debit
        self.credit = refreshed.credit
        self.investment = refreshed.investment

    # ------------------------------------------------------------------
    # Layered model conversions
    # ------------------------------------------------------------------

    def to_transaction_core(self) -> TransactionCore:
        return TransactionCore(
            id=self.number,
            date=self.date,
            value_date=self.value_date,
            amount=self.money,
            description=self.description,
            status=self.status,
            reference=self.reference,
        )

    def to_transaction_with_parties(self) -> TransactionWithParties:
        """Both parties share party_iban; the flat record only keeps one."""
        return TransactionWithParties(
            core=self.to_transaction_core(),
            payer=Party.create(self.payer, self.party_iban),
            payee=Party.create(self.payee, self.party_iban),
            direction=self.direction,
        )

    def to_categorized_transaction(self) -> CategorizedTransaction:
        return CategorizedTransaction(
            parties=self.to_transaction_with_parties(),
            category=self.category,
            type=self.type,
            fund=self.fund,
        )

    @classmethod
    def from_transaction_core(cls, core: TransactionCore) -> "Transaction":
        return cls(
            number=core.id,
            date=core.date,
            value_date=core.value_date,
            amount=core.amount.amount,
            currency=core.amount.currency,
            description=core.description,
            status=core.status,
            reference=core.reference,
        )

    @classmethod
    def from_categorized_transaction(cls, ct: CategorizedTransaction) -> "Transaction":
        """
        Fold the layered model back into a flat record.

        party_name and party_iban come from the counterparty; derived
        fields are refreshed.
        """
        tx = cls.from_transaction_core(ct.core)
        tx.payer = ct.payer.name
        tx.payee = ct.payee.name
        counterparty = ct.get_counterparty()
        tx.party_name = counterparty.name
        tx.party_iban = counterparty.account_identifier
        if ct.direction is not Direction.UNKNOWN:
            tx.apply_direction(ct.direction)
        tx.category = ct.category
        tx.type = ct.type
        tx.fund = ct.fund
        tx.refresh_derived_fields()
        return tx

    def to_builder(self) -> "TransactionBuilder":
        """Seed a TransactionBuilder with a copy of this record."""
        from statement_ledger.domain.builders import TransactionBuilder

        return TransactionBuilder.from_transaction(self)

    def copy(self) -> "Transaction":
        """Independent copy; all field values are immutable."""
        return replace(self)
