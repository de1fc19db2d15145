"""
Calendar helpers for the Thai Buddhist-era dates used by the source workbook.

The workbook writes dates as ``dd-mm-yyyy`` with a Buddhist-era year
(Gregorian year + 543). Everything downstream works on Gregorian
``datetime.date`` values; the Buddhist-era string is kept for display only.
"""

from datetime import date
from typing import Optional

BUDDHIST_ERA_OFFSET = 543


def parse_display_date(value: str) -> Optional[date]:
    """
    Parse a ``dd-mm-yyyy`` Buddhist-era string into a Gregorian date.

    Returns None when the string does not have three numeric parts or does
    not name a real calendar day.
    """
    parts = [p.strip() for p in str(value).strip().split("-")]
    if len(parts) != 3 or not all(p.isdigit() for p in parts):
        return None
    day, month, year = (int(p) for p in parts)
    try:
        return date(year - BUDDHIST_ERA_OFFSET, month, day)
    except ValueError:
        return None


def format_display_date(value: date) -> str:
    """Format a Gregorian date as the workbook's ``dd-mm-yyyy`` Buddhist-era string."""
    return f"{value.day:02d}-{value.month:02d}-{value.year + BUDDHIST_ERA_OFFSET}"
