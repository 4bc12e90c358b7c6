"""
Date helpers for receipt parsing: two-digit year pivot, month names and
the recency window a receipt date must fall into.
"""

from datetime import date
from typing import Optional, Tuple


# Two-digit years up to and including the pivot belong to the 2000s
PIVOT_YEAR = 30

# A receipt date older than this many years is treated as misread
WINDOW_YEARS = 5

MONTHS = {
    'jan': 1, 'feb': 2, 'mar': 3, 'apr': 4, 'may': 5, 'jun': 6,
    'jul': 7, 'aug': 8, 'sep': 9, 'oct': 10, 'nov': 11, 'dec': 12,
}


def expand_two_digit_year(year: str) -> int:
    """
    Expand a two-digit year using the pivot.

    >>> expand_two_digit_year("30")
    2030
    >>> expand_two_digit_year("31")
    1931
    """
    value = int(year)
    return 2000 + value if value <= PIVOT_YEAR else 1900 + value


def month_from_name(name: str) -> Optional[int]:
    """Month number for an English month name or abbreviation ("Dec", "December", "Sept")."""
    key = name.strip().lower()[:3]
    if len(key) < 3:
        return None
    return MONTHS.get(key)


def subtract_years(day: date, years: int) -> date:
    """Same calendar day ``years`` earlier; Feb 29 falls back to Feb 28."""
    try:
        return day.replace(year=day.year - years)
    except ValueError:
        return day.replace(year=day.year - years, day=28)


def validity_window(today: Optional[date] = None) -> Tuple[date, date]:
    """Closed interval ``[today - 5 years, today]``."""
    today = today or date.today()
    return subtract_years(today, WINDOW_YEARS), today


def is_within_window(candidate: date, today: Optional[date] = None) -> bool:
    """Check a parsed date against the recency window."""
    start, end = validity_window(today)
    return start <= candidate <= end
