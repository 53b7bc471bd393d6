"""
Normalization helpers for raw statement values.
"""

from .amounts import (
    format_decimal,
    parse_amount,
    parse_amount_or_zero,
    quantize,
    standardize_amount,
)
from .dates import (
    DATE_LAYOUT_CSV,
    DATE_LAYOUT_FULL,
    DATE_LAYOUT_ISO,
    format_csv_date,
    format_iso_date,
    parse_csv_date,
    parse_iso_date,
    parse_iso_datetime,
)

__all__ = [
    # Amounts
    "format_decimal",
    "parse_amount",
    "parse_amount_or_zero",
    "quantize",
    "standardize_amount",
    # Dates
    "DATE_LAYOUT_CSV",
    "DATE_LAYOUT_FULL",
    "DATE_LAYOUT_ISO",
    "format_csv_date",
    "format_iso_date",
    "parse_csv_date",
    "parse_iso_date",
    "parse_iso_datetime",
]
