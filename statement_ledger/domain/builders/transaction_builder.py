"""
Fluent TransactionBuilder.

Parsers feed raw statement values into the builder one setter at a
time. Setters never raise: the first problem (an unparsable date, a bad
amount) is kept as the pending error, every later setter becomes a
no-op, and build() raises it. A chain like

    TransactionBuilder().with_date("2025-01-15").with_amount_from_string("-100.50", "CHF").build()

is therefore always safe to write in one expression.
"""

from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Optional
from uuid import uuid4

import structlog

from statement_ledger.core.config import get_settings
from statement_ledger.core.metrics import record_transaction_built
from statement_ledger.domain.entities.category import UNCATEGORIZED
from statement_ledger.domain.entities.direction import Direction
from statement_ledger.domain.entities.money import Money
from statement_ledger.domain.entities.transaction import Transaction
from statement_ledger.domain.entities.transaction_core import TransactionStatus
from statement_ledger.domain.exceptions import (
    DomainException,
    ParseException,
    ValidationException,
)
from statement_ledger.service.normalization import (
    parse_amount,
    parse_iso_date,
    parse_iso_datetime,
)

logger = structlog.get_logger(__name__)


class TransactionBuilder:
    """
    Accumulates a flat Transaction and a sticky pending error.

    Args:
        default_currency: Currency of a fresh record; falls back to settings
        record_metrics: Count built transactions; falls back to settings
    """

    def __init__(
        self,
        default_currency: Optional[str] = None,
        record_metrics: Optional[bool] = None,
    ):
        settings = get_settings()
        self._default_currency = (
            default_currency if default_currency is not None else settings.default_currency
        )
        self._record_metrics = (
            record_metrics if record_metrics is not None else settings.metrics_enabled
        )
        self._tx = self._fresh_transaction()
        self._error: Optional[DomainException] = None

    @classmethod
    def from_transaction(cls, transaction: Transaction, **kwargs) -> "TransactionBuilder":
        """Seed a builder with a copy of an existing record."""
        builder = cls(**kwargs)
        builder._tx = replace(transaction)
        return builder

    def _fresh_transaction(self) -> Transaction:
        return Transaction(
            number=str(uuid4()),
            status=TransactionStatus.COMPLETED.value,
            currency=self._default_currency,
            category=UNCATEGORIZED,
        )

    @property
    def pending_error(self) -> Optional[DomainException]:
        """The first error recorded by a setter, if any."""
        return self._error

    def _fail(self, error: DomainException) -> "TransactionBuilder":
        if self._error is None:
            self._error = error
        return self

    # =========================================================================
    # Identity and status
    # =========================================================================

    def with_id(self, id: str) -> "TransactionBuilder":
        if self._error is None:
            self._tx.number = id
        return self

    def with_bookkeeping_number(self, number: str) -> "TransactionBuilder":
        if self._error is None:
            self._tx.bookkeeping_number = number
        return self

    def with_status(self, status: str) -> "TransactionBuilder":
        if self._error is None:
            self._tx.status = status
        return self

    # =========================================================================
    # Dates
    # =========================================================================

    def with_date(self, value: str) -> "TransactionBuilder":
        """Set the booking date from YYYY-MM-DD."""
        if self._error is not None:
            return self
        try:
            self._tx.date = parse_iso_date(value, "date")
        except ParseException as e:
            return self._fail(e)
        return self

    def with_datetime(self, value: date) -> "TransactionBuilder":
        if self._error is None:
            self._tx.date = _as_date(value)
        return self

    def with_value_date(self, value: str) -> "TransactionBuilder":
        """Set the value date from YYYY-MM-DD."""
        if self._error is not None:
            return self
        try:
            self._tx.value_date = parse_iso_date(value, "value date")
        except ParseException as e:
            return self._fail(e)
        return self

    def with_value_datetime(self, value: date) -> "TransactionBuilder":
        if self._error is None:
            self._tx.value_date = _as_date(value)
        return self

    def with_date_from_datetime(self, value: str) -> "TransactionBuilder":
        """Set the booking date from "YYYY-MM-DD HH:MM:SS" or YYYY-MM-DD."""
        if self._error is not None:
            return self
        try:
            self._tx.date = parse_iso_datetime(value, "datetime")
        except ParseException as e:
            return self._fail(e)
        return self

    def with_value_date_from_datetime(self, value: str) -> "TransactionBuilder":
        if self._error is not None:
            return self
        try:
            self._tx.value_date = parse_iso_datetime(value, "value datetime")
        except ParseException as e:
            return self._fail(e)
        return self

    # =========================================================================
    # Amounts
    # =========================================================================

    def with_amount(self, amount: Decimal, currency: str) -> "TransactionBuilder":
        if self._error is not None:
            return self
        try:
            value = _to_decimal(amount, "amount")
        except ParseException as e:
            return self._fail(e)
        self._tx.amount = value
        self._tx.currency = currency
        return self

    def with_money(self, money: Money) -> "TransactionBuilder":
        return self.with_amount(money.amount, money.currency)

    def with_amount_from_float(self, amount: float, currency: str) -> "TransactionBuilder":
        """Lossy; prefer with_amount or with_amount_from_string."""
        if self._error is not None:
            return self
        try:
            _to_decimal(amount, "amount")
        except ParseException as e:
            return self._fail(e)
        self._tx.set_amount_from_float(amount, currency)
        return self

    def with_amount_from_string(self, value: str, currency: str) -> "TransactionBuilder":
        """Parse a loosely formatted amount ("1'234.56", "1.234,56")."""
        if self._error is not None:
            return self
        try:
            amount = parse_amount(value)
        except ParseException as e:
            return self._fail(e)
        self._tx.amount = amount
        self._tx.currency = currency
        return self

    def with_fees(self, fees: Decimal) -> "TransactionBuilder":
        if self._error is not None:
            return self
        try:
            self._tx.fees = _to_decimal(fees, "fees")
        except ParseException as e:
            return self._fail(e)
        return self

    def with_fees_from_float(self, fees: float) -> "TransactionBuilder":
        return self.with_fees(fees)

    def with_original_amount(self, amount: Decimal, currency: str) -> "TransactionBuilder":
        if self._error is not None:
            return self
        try:
            self._tx.original_amount = _to_decimal(amount, "original amount")
        except ParseException as e:
            return self._fail(e)
        self._tx.original_currency = currency
        return self

    def with_exchange_rate(self, rate: Decimal) -> "TransactionBuilder":
        if self._error is not None:
            return self
        try:
            self._tx.exchange_rate = _to_decimal(rate, "exchange rate")
        except ParseException as e:
            return self._fail(e)
        return self

    def with_tax(
        self,
        amount_excl_tax: Decimal,
        amount_tax: Decimal,
        tax_rate: Decimal,
    ) -> "TransactionBuilder":
        if self._error is not None:
            return self
        try:
            values = (
                _to_decimal(amount_excl_tax, "amount excl. tax"),
                _to_decimal(amount_tax, "tax amount"),
                _to_decimal(tax_rate, "tax rate"),
            )
        except ParseException as e:
            return self._fail(e)
        self._tx.amount_excl_tax, self._tx.amount_tax, self._tx.tax_rate = values
        return self

    # =========================================================================
    # Descriptive fields
    # =========================================================================

    def with_description(self, description: str) -> "TransactionBuilder":
        if self._error is None:
            self._tx.description = description
        return self

    def with_remittance_info(self, info: str) -> "TransactionBuilder":
        if self._error is None:
            self._tx.remittance_info = info
        return self

    def with_reference(self, reference: str) -> "TransactionBuilder":
        if self._error is None:
            self._tx.reference = reference
        return self

    def with_entry_reference(self, reference: str) -> "TransactionBuilder":
        if self._error is None:
            self._tx.entry_reference = reference
        return self

    def with_account_servicer(self, servicer: str) -> "TransactionBuilder":
        if self._error is None:
            self._tx.account_servicer = servicer
        return self

    def with_bank_tx_code(self, code: str) -> "TransactionBuilder":
        if self._error is None:
            self._tx.bank_tx_code = code
        return self

    def with_iban(self, iban: str) -> "TransactionBuilder":
        """Account holder's own account identifier."""
        if self._error is None:
            self._tx.iban = iban
        return self

    # =========================================================================
    # Parties
    # =========================================================================

    def with_payer(self, name: str, iban: str = "") -> "TransactionBuilder":
        if self._error is None:
            self._tx.set_payer_info(name, iban)
        return self

    def with_payee(self, name: str, iban: str = "") -> "TransactionBuilder":
        if self._error is None:
            self._tx.set_payee_info(name, iban)
        return self

    def with_party_name(self, name: str) -> "TransactionBuilder":
        if self._error is None:
            self._tx.party_name = name
        return self

    def with_party_iban(self, iban: str) -> "TransactionBuilder":
        if self._error is None:
            self._tx.party_iban = iban
        return self

    # =========================================================================
    # Categorization and investments
    # =========================================================================

    def with_category(self, category: str) -> "TransactionBuilder":
        if self._error is None:
            self._tx.category = category
        return self

    def with_type(self, type: str) -> "TransactionBuilder":
        if self._error is None:
            self._tx.type = type
        return self

    def with_fund(self, fund: str) -> "TransactionBuilder":
        if self._error is None:
            self._tx.fund = fund
        return self

    def with_investment(self, investment: str) -> "TransactionBuilder":
        if self._error is None:
            self._tx.investment = investment
        return self

    def with_number_of_shares(self, shares: int) -> "TransactionBuilder":
        if self._error is None:
            self._tx.number_of_shares = shares
        return self

    # =========================================================================
    # Direction
    # =========================================================================

    def with_direction(self, direction: Direction) -> "TransactionBuilder":
        """Explicit direction; UNKNOWN clears it so later signals decide."""
        if self._error is None:
            self._tx.credit_debit = direction.code
        return self

    def with_debit_flag(self, is_debit: bool) -> "TransactionBuilder":
        if self._error is None:
            self._tx.debit_flag = is_debit
        return self

    def as_debit(self) -> "TransactionBuilder":
        if self._error is None:
            self._tx.apply_direction(Direction.DEBIT)
        return self

    def as_credit(self) -> "TransactionBuilder":
        if self._error is None:
            self._tx.apply_direction(Direction.CREDIT)
        return self

    # =========================================================================
    # Build
    # =========================================================================

    def build(self) -> Transaction:
        """
        Validate and return the finished record.

        The returned Transaction is a copy; the builder keeps its own
        state and can be built again or cloned.

        Raises:
            DomainException: The pending error recorded by a setter
            ValidationException: If date, amount or currency is missing
        """
        if self._error is not None:
            raise self._error

        tx = self._tx
        if tx.date is None:
            raise ValidationException("date is required")
        if tx.amount.is_zero() and tx.debit.is_zero() and tx.credit.is_zero():
            raise ValidationException("amount is required")
        if not tx.currency:
            raise ValidationException("currency is required")

        built = replace(tx)
        _populate_derived_fields(built)

        if self._record_metrics:
            record_transaction_built()
        logger.debug(
            "transaction_built",
            number=built.number,
            direction=built.direction.value,
        )
        return built

    def clone(self) -> "TransactionBuilder":
        """Independent builder with the same record and pending error."""
        twin = TransactionBuilder(
            default_currency=self._default_currency,
            record_metrics=self._record_metrics,
        )
        twin._tx = replace(self._tx)
        twin._error = self._error
        return twin

    def reset(self) -> "TransactionBuilder":
        """Discard all state in place and start over with fresh defaults."""
        self._tx = self._fresh_transaction()
        self._error = None
        return self


def _as_date(value: date) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def _populate_derived_fields(tx: Transaction) -> None:
    """
    Fill derived fields on a validated record.

    Order matters: the split and the display name depend on the
    direction resolved in step 2.
    """
    # Only debit/credit were given; take the amount from them.
    if tx.amount.is_zero():
        if not tx.credit.is_zero():
            tx.amount = tx.credit
        else:
            tx.amount = -abs(tx.debit)

    if tx.value_date is None:
        tx.value_date = tx.date

    tx.apply_direction(tx.direction)
    tx.update_name_from_parties()
    tx.update_recipient_from_payee()
    tx.update_debit_credit_amounts()
    tx.update_investment_type_from_legacy_field()

    if not tx.party_name:
        tx.party_name = tx.get_party_name()


def _to_decimal(value, field: str) -> Decimal:
    """
    Convert a numeric setter argument to a finite Decimal.

    Floats go through their shortest repr, like Money.from_float.

    Raises:
        ParseException: If the value is not a number or is NaN/infinite
    """
    try:
        if isinstance(value, float):
            result = Money.from_float(value, "").amount
        else:
            result = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise ParseException(field, str(value))
    if not result.is_finite():
        raise ParseException(field, str(value), "not a finite number")
    return result
