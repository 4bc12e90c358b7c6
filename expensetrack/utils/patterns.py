"""
Ordered pattern tables used by the receipt parser.

Order is significant: the date table is searched first-match-wins, so a
pattern earlier in DATE_PATTERNS always takes precedence over a later one
on the same line.
"""

import re
from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class PatternSpec:
    """A named regex pattern with example and notes for documentation."""
    name: str
    pattern: str
    example: str
    notes: Optional[str] = None
    format_tag: Optional[str] = None
    flags: int = re.IGNORECASE
    compiled: re.Pattern = field(default=None, init=False, compare=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, 'compiled', re.compile(self.pattern, self.flags))


# Format tags: how captured groups are read back into (day, month, year)
FMT_ISO = 'YYYY-MM-DD'
FMT_DMY_SLASH = 'DD/MM/YYYY'
FMT_DMY_SLASH_SHORT = 'DD/MM/YY'
FMT_DMY_DASH = 'DD-MM-YYYY'
FMT_DMY_DASH_SHORT = 'DD-MM-YY'
FMT_MONTH_FIRST = 'MMM DD, YYYY'
FMT_DAY_FIRST = 'DD MMM YYYY'

_NUMBER = r'(\d{1,3}(?:,\d{3})+(?:\.\d+)?|\d+(?:\.\d+)?)'
_CURRENCY_TOKEN = r'(\d{1,3}(?:,\d{3})+\.\d{2}|\d+\.\d{2})(?!\d)'


AMOUNT_PATTERNS: Tuple[PatternSpec, ...] = (
    PatternSpec(
        name='labeled_total',
        pattern=r'(?:total|amount|sum)[:\s]*\$?\s*' + _NUMBER,
        example='Total: $12.50',
        notes='Keyword-labeled value; decimals optional',
    ),
    PatternSpec(
        name='currency_token',
        pattern=r'(?<![\d,.])\$?\s?' + _CURRENCY_TOKEN,
        example='$45.99 or 45.99',
        notes='Any number with exactly two decimal digits, symbol optional',
    ),
)


DATE_PATTERNS: Tuple[PatternSpec, ...] = (
    PatternSpec(
        name='iso',
        pattern=r'(?<!\d)(\d{4})-(\d{1,2})-(\d{1,2})(?!\d)',
        example='2024-01-04',
        format_tag=FMT_ISO,
    ),
    PatternSpec(
        name='dmy_slash',
        pattern=r'(?<!\d)(\d{1,2})/(\d{1,2})/(\d{4})(?!\d)',
        example='05/12/2023',
        notes='Day before month; no locale detection',
        format_tag=FMT_DMY_SLASH,
    ),
    PatternSpec(
        name='dmy_slash_short',
        pattern=r'(?<!\d)(\d{1,2})/(\d{1,2})/(\d{2})(?!\d)',
        example='05/12/23',
        format_tag=FMT_DMY_SLASH_SHORT,
    ),
    PatternSpec(
        name='dmy_dash',
        pattern=r'(?<!\d)(\d{1,2})-(\d{1,2})-(\d{4})(?!\d)',
        example='04-01-2024',
        format_tag=FMT_DMY_DASH,
    ),
    PatternSpec(
        name='dmy_dash_short',
        pattern=r'(?<!\d)(\d{1,2})-(\d{1,2})-(\d{2})(?!\d)',
        example='04-01-24',
        format_tag=FMT_DMY_DASH_SHORT,
    ),
    PatternSpec(
        name='month_name_first',
        pattern=r'\b([A-Za-z]{3,9})\.?\s+(\d{1,2}),?\s+(\d{4})(?!\d)',
        example='Dec 5, 2023',
        format_tag=FMT_MONTH_FIRST,
    ),
    PatternSpec(
        name='day_first_month_name',
        pattern=r'(?<!\d)(\d{1,2})\s+([A-Za-z]{3,9})\.?,?\s+(\d{4})(?!\d)',
        example='5 Dec 2023',
        format_tag=FMT_DAY_FIRST,
    ),
)
