"""
Calendar-date helpers.

Job dates are stored as ``YYYY-MM-DD`` strings and compared as calendar
dates at local midnight, never as instants.
"""

import re
from datetime import date, timedelta
from typing import Optional

ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def today_local() -> date:
    """Today's date in the server's local timezone."""
    return date.today()


def parse_calendar_date(value: Optional[str]) -> Optional[date]:
    """
    Parse a ``YYYY-MM-DD`` string into a date.

    Returns None for missing, blank, or malformed values instead of raising,
    so callers can treat an unparseable deadline as "no deadline".

    Examples:
        >>> parse_calendar_date("2024-03-25")
        datetime.date(2024, 3, 25)
        >>> parse_calendar_date("25/03/2024") is None
        True
    """
    if not value:
        return None
    value = value.strip()
    if not ISO_DATE_RE.match(value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def format_date(value: date) -> str:
    return value.isoformat()


def add_days(value: date, days: int) -> date:
    return value + timedelta(days=days)


def resolve_today(value: Optional[str] = None) -> date:
    """Use an explicit ``YYYY-MM-DD`` override if given, else the local date."""
    parsed = parse_calendar_date(value)
    return parsed if parsed is not None else today_local()
