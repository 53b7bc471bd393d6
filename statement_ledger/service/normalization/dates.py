"""
Date parsing and formatting.

Adapters hand dates to the builder as ISO strings (YYYY-MM-DD), some
with a time part (YYYY-MM-DD HH:MM:SS). The CSV output uses the Swiss
DD.MM.YYYY layout.
"""

from datetime import date, datetime
from typing import Optional

from statement_ledger.domain.exceptions import ParseException

DATE_LAYOUT_ISO = "%Y-%m-%d"
DATE_LAYOUT_FULL = "%Y-%m-%d %H:%M:%S"
DATE_LAYOUT_CSV = "%d.%m.%Y"


def parse_iso_date(value: str, field: str = "date") -> date:
    """
    Parse a YYYY-MM-DD string.

    Raises:
        ParseException: If the value does not match the layout
    """
    try:
        return datetime.strptime(value.strip(), DATE_LAYOUT_ISO).date()
    except (ValueError, AttributeError) as e:
        raise ParseException(f"{field} format", str(value), str(e))


def parse_iso_datetime(value: str, field: str = "datetime") -> date:
    """
    Parse "YYYY-MM-DD HH:MM:SS", falling back to a bare "YYYY-MM-DD".

    Only the calendar date is kept.

    Raises:
        ParseException: If neither layout matches
    """
    text = value.strip() if isinstance(value, str) else value
    try:
        return datetime.strptime(text, DATE_LAYOUT_FULL).date()
    except (ValueError, TypeError):
        pass
    try:
        return datetime.strptime(text, DATE_LAYOUT_ISO).date()
    except (ValueError, TypeError) as e:
        raise ParseException(f"{field} format", str(value), str(e))


def format_iso_date(value: Optional[date]) -> str:
    """YYYY-MM-DD, or an empty string for a missing date."""
    if value is None:
        return ""
    return value.strftime(DATE_LAYOUT_ISO)


def format_csv_date(value: Optional[date]) -> str:
    """DD.MM.YYYY, or an empty string for a missing date."""
    if value is None:
        return ""
    return value.strftime(DATE_LAYOUT_CSV)


def parse_csv_date(value: str, field: str = "date") -> Optional[date]:
    """
    Parse a date cell read back from CSV.

    Accepts DD.MM.YYYY and YYYY-MM-DD; an empty cell is None.

    Raises:
        ParseException: If the cell is neither layout
    """
    text = value.strip()
    if not text:
        return None
    for layout in (DATE_LAYOUT_CSV, DATE_LAYOUT_ISO):
        try:
            return datetime.strptime(text, layout).date()
        except ValueError:
            continue
    raise ParseException(field, value, "expected DD.MM.YYYY")
