"""
Canonical transaction CSV.

Every parser writes the same 34 positional columns. Dates are written
as DD.MM.YYYY, decimals with two places and the debit flag as the
literals "true"/"false". Reading accepts exactly the same layout; a
row with a different column count is rejected rather than re-mapped.
"""

import csv
from decimal import Decimal
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, TextIO, Union

import structlog

from statement_ledger.core.config import get_settings
from statement_ledger.domain.entities import Transaction
from statement_ledger.domain.exceptions import ParseException
from statement_ledger.service.normalization import (
    format_csv_date,
    format_decimal,
    parse_amount,
    parse_csv_date,
)

CSV_COLUMNS = [
    "BookkeepingNumber",
    "Status",
    "Date",
    "ValueDate",
    "Name",
    "Description",
    "RemittanceInfo",
    "PartyName",
    "PartyIBAN",
    "Amount",
    "CreditDebit",
    "IsDebit",
    "Debit",
    "Credit",
    "Currency",
    "AmountExclTax",
    "AmountTax",
    "TaxRate",
    "Recipient",
    "InvestmentType",
    "Number",
    "Category",
    "Type",
    "Fund",
    "NumberOfShares",
    "Fees",
    "IBAN",
    "EntryReference",
    "Reference",
    "AccountServicer",
    "BankTxCode",
    "OriginalCurrency",
    "OriginalAmount",
    "ExchangeRate",
]

# Column -> Transaction attribute, grouped by how the cell is encoded.
_TEXT_FIELDS: Dict[str, str] = {
    "BookkeepingNumber": "bookkeeping_number",
    "Status": "status",
    "Name": "name",
    "Description": "description",
    "RemittanceInfo": "remittance_info",
    "PartyName": "party_name",
    "PartyIBAN": "party_iban",
    "CreditDebit": "credit_debit",
    "Currency": "currency",
    "Recipient": "recipient",
    "InvestmentType": "investment",
    "Number": "number",
    "Category": "category",
    "Type": "type",
    "Fund": "fund",
    "IBAN": "iban",
    "EntryReference": "entry_reference",
    "Reference": "reference",
    "AccountServicer": "account_servicer",
    "BankTxCode": "bank_tx_code",
    "OriginalCurrency": "original_currency",
}

_DECIMAL_FIELDS: Dict[str, str] = {
    "Amount": "amount",
    "Debit": "debit",
    "Credit": "credit",
    "AmountExclTax": "amount_excl_tax",
    "AmountTax": "amount_tax",
    "TaxRate": "tax_rate",
    "Fees": "fees",
    "OriginalAmount": "original_amount",
    "ExchangeRate": "exchange_rate",
}

_DATE_FIELDS: Dict[str, str] = {
    "Date": "date",
    "ValueDate": "value_date",
}

_default_logger = structlog.get_logger(__name__)


def transaction_to_row(tx: Transaction) -> List[str]:
    """Encode one record as the 34 CSV cells, in column order."""
    cells: List[str] = []
    for column in CSV_COLUMNS:
        if column in _TEXT_FIELDS:
            cells.append(getattr(tx, _TEXT_FIELDS[column]))
        elif column in _DECIMAL_FIELDS:
            cells.append(format_decimal(getattr(tx, _DECIMAL_FIELDS[column])))
        elif column in _DATE_FIELDS:
            cells.append(format_csv_date(getattr(tx, _DATE_FIELDS[column])))
        elif column == "IsDebit":
            cells.append("true" if tx.is_debit() else "false")
        elif column == "NumberOfShares":
            cells.append(str(tx.number_of_shares))
    return cells


def row_to_transaction(row: List[str]) -> Transaction:
    """
    Decode one CSV row written by transaction_to_row.

    Raises:
        ParseException: On a wrong column count or an unparsable cell
    """
    if len(row) != len(CSV_COLUMNS):
        raise ParseException(
            "row",
            str(len(row)),
            f"expected {len(CSV_COLUMNS)} columns",
        )

    values: Dict[str, Any] = {}
    for column, cell in zip(CSV_COLUMNS, row):
        if column in _TEXT_FIELDS:
            values[_TEXT_FIELDS[column]] = cell
        elif column in _DECIMAL_FIELDS:
            values[_DECIMAL_FIELDS[column]] = _parse_decimal_cell(column, cell)
        elif column in _DATE_FIELDS:
            values[_DATE_FIELDS[column]] = parse_csv_date(cell, column)
        elif column == "IsDebit":
            values["debit_flag"] = _parse_bool_cell(column, cell)
        elif column == "NumberOfShares":
            values["number_of_shares"] = _parse_int_cell(column, cell)

    return Transaction(**values)


def _parse_decimal_cell(column: str, cell: str) -> Decimal:
    try:
        return parse_amount(cell)
    except ParseException as e:
        raise ParseException(column, cell, "not a decimal number") from e


def _parse_bool_cell(column: str, cell: str) -> Optional[bool]:
    text = cell.strip().lower()
    if text == "":
        return None
    if text == "true":
        return True
    if text == "false":
        return False
    raise ParseException(column, cell, "expected true or false")


def _parse_int_cell(column: str, cell: str) -> int:
    text = cell.strip()
    if text == "":
        return 0
    try:
        return int(text)
    except ValueError:
        raise ParseException(column, cell, "expected an integer")


def _resolve_delimiter(delimiter: Optional[str]) -> str:
    if delimiter is None:
        return get_settings().csv_delimiter
    if len(delimiter) != 1:
        raise ValueError(f"delimiter must be a single character, got {delimiter!r}")
    return delimiter


def write_transactions(
    transactions: Iterable[Transaction],
    stream: TextIO,
    delimiter: Optional[str] = None,
    logger: Any = None,
) -> int:
    """
    Write the header and one row per record to an open text stream.

    Derived fields are refreshed on copies; the caller's records are
    not modified.

    Args:
        transactions: Records to write
        stream: Text stream opened with newline=""
        delimiter: Column separator, defaults to the configured one
        logger: structlog-style logger, defaults to this module's

    Returns:
        Number of data rows written

    Raises:
        ValueError: If transactions is None or the delimiter is invalid
    """
    if transactions is None:
        raise ValueError("cannot write None transactions to CSV")

    log = logger if logger is not None else _default_logger
    writer = csv.writer(stream, delimiter=_resolve_delimiter(delimiter))
    writer.writerow(CSV_COLUMNS)

    count = 0
    for tx in transactions:
        prepared = tx.copy()
        prepared.refresh_derived_fields()
        writer.writerow(transaction_to_row(prepared))
        count += 1

    log.debug("transactions_serialized", count=count)
    return count


def write_transactions_to_csv(
    transactions: List[Transaction],
    path: Union[str, Path],
    delimiter: Optional[str] = None,
    logger: Any = None,
) -> int:
    """
    Write records to a CSV file, creating parent directories.

    Raises:
        ValueError: If transactions is None or the delimiter is invalid
        OSError: If the file can not be created
    """
    if transactions is None:
        raise ValueError("cannot write None transactions to CSV")

    log = logger if logger is not None else _default_logger
    target = Path(path)
    log = log.bind(file=str(target), count=len(transactions))
    log.info("transactions_writing")

    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8", newline="") as f:
        count = write_transactions(transactions, f, delimiter=delimiter, logger=log)

    log.info("transactions_written")
    return count


def read_transactions(
    stream: TextIO,
    delimiter: Optional[str] = None,
    on_error: Optional[Callable[[int, ParseException], None]] = None,
) -> List[Transaction]:
    """
    Read records written by write_transactions.

    The header row must match CSV_COLUMNS exactly.

    Args:
        stream: Text stream opened with newline=""
        delimiter: Column separator, defaults to the configured one
        on_error: Called with (line number, error) for a bad data row,
            which is then skipped; without it the error is raised

    Raises:
        ParseException: On a missing or mismatched header, or a bad row
            when no on_error callback is given
    """
    reader = csv.reader(stream, delimiter=_resolve_delimiter(delimiter))
    header = next(reader, None)
    if header != CSV_COLUMNS:
        raise ParseException("header", _describe_header(header), "unexpected CSV columns")

    transactions = []
    for row in reader:
        if not row:
            continue
        try:
            transactions.append(row_to_transaction(row))
        except ParseException as e:
            if on_error is None:
                raise
            on_error(reader.line_num, e)
    return transactions


def _describe_header(header: Optional[List[str]]) -> str:
    if header is None:
        return ""
    return ",".join(header)
