"""
Amount normalization for bank-statement exports.

Bank exports disagree on how to write a number: "CHF 1'234.56",
"1.234,56 €", "$1,234.56" and "1234,56" all show up. These helpers
bring such strings to a plain decimal representation before they
reach the Decimal constructor.
"""

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from statement_ledger.domain.exceptions import ParseException

_CURRENCY_MARKERS = re.compile(r"[€$£¥₣₤₧₹₺₽₩฿₫₲₴₸₼₪\s]|CHF|EUR|USD|GBP")


def standardize_amount(amount_str: str) -> str:
    """
    Convert a loosely formatted amount into a Decimal-parsable string.

    Rules:
        - Currency symbols, ISO codes and whitespace are removed
        - "1.234,56" (dot thousands, comma decimal) becomes "1234.56"
        - "1234,56" (comma followed by at most two digits) becomes "1234.56"
        - "1,234" (comma thousands) becomes "1234"
        - Apostrophe thousands separators ("1'234.56") are dropped

    Strings that are not numbers come back cleaned but otherwise as-is;
    parsing them is the caller's decision.
    """
    cleaned = _CURRENCY_MARKERS.sub("", amount_str)

    if "," in cleaned and "." in cleaned:
        if cleaned.rfind(".") < cleaned.rfind(","):
            cleaned = cleaned.replace(".", "").replace(",", ".")
        else:
            cleaned = cleaned.replace(",", "")
    elif "," in cleaned:
        parts = cleaned.split(",")
        if len(parts[-1]) <= 2:
            cleaned = cleaned.replace(",", ".")
        else:
            cleaned = cleaned.replace(",", "")

    return cleaned.replace("'", "")


def parse_amount(amount_str: str) -> Decimal:
    """
    Parse a loosely formatted amount into a Decimal.

    Empty strings are zero.

    Raises:
        ParseException: If the standardized string is not a number
    """
    if amount_str is None or amount_str.strip() == "":
        return Decimal("0")

    standardized = standardize_amount(amount_str)
    try:
        value = Decimal(standardized)
    except InvalidOperation:
        raise ParseException("amount", amount_str, "not a decimal number")

    if not value.is_finite():
        raise ParseException("amount", amount_str, "not a finite number")
    return value


def parse_amount_or_zero(amount_str: str) -> Decimal:
    """Lenient variant of parse_amount for optional columns."""
    try:
        return parse_amount(amount_str)
    except ParseException:
        return Decimal("0")


def quantize(value: Decimal, places: int = 2) -> Decimal:
    """Round half away from zero to a fixed number of places."""
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def format_decimal(value: Decimal, places: int = 2) -> str:
    """Render a decimal with a fixed number of places ("-0.00" never appears)."""
    rounded = quantize(value, places)
    if rounded.is_zero():
        rounded = abs(rounded)
    return f"{rounded:.{places}f}"
