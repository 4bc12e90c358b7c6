"""
Money parsing helpers.

Receipts are read in a single-symbol US style: ``$1,234.56``. Locale
detection and currency conversion are not attempted.
"""

from decimal import Decimal, InvalidOperation
from typing import Optional
import re


CURRENCY_SYMBOL = "$"

# Exclusive bounds for a plausible receipt amount
MIN_AMOUNT = Decimal("0")
MAX_AMOUNT = Decimal("10000")


def parse_money(amount_str: str) -> Optional[Decimal]:
    """
    Parse a money token into a Decimal.

    Args:
        amount_str: Token such as "$12.50", "12.50" or "1,234.56"

    Returns:
        Decimal amount or None if the token is not a number

    Examples:
        >>> parse_money("$1,234.56")
        Decimal('1234.56')
        >>> parse_money("12.")
        Decimal('12')
    """
    if not amount_str or not isinstance(amount_str, str):
        return None

    cleaned = amount_str.strip().replace(CURRENCY_SYMBOL, "").replace(",", "").strip()

    # A bare "." or an empty string is not a number
    if not re.search(r"\d", cleaned):
        return None

    try:
        value = Decimal(cleaned)
    except (InvalidOperation, ValueError):
        return None

    if not value.is_finite():
        return None

    return value


def is_plausible_amount(value: Optional[Decimal]) -> bool:
    """True when ``0 < value < 10000``."""
    return value is not None and MIN_AMOUNT < value < MAX_AMOUNT
