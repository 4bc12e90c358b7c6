"""
Receipt parser service for extracting structured data from OCR text.
"""

import re
import logging
from datetime import date
from decimal import Decimal
from types import MappingProxyType
from typing import Optional, List, Tuple

from expensetrack.models.receipt import ExtractionResult, FieldConfidence
from expensetrack.services.categorizer import suggest_category
from expensetrack.utils.dates import (
    expand_two_digit_year,
    is_within_window,
    month_from_name,
)
from expensetrack.utils.money import parse_money, is_plausible_amount
from expensetrack.utils.patterns import (
    AMOUNT_PATTERNS,
    DATE_PATTERNS,
    FMT_ISO,
    FMT_DMY_SLASH,
    FMT_DMY_SLASH_SHORT,
    FMT_DMY_DASH,
    FMT_DMY_DASH_SHORT,
    FMT_MONTH_FIRST,
    FMT_DAY_FIRST,
    PatternSpec,
)

logger = logging.getLogger(__name__)


class ReceiptParser:
    """
    Service for parsing receipt text and extracting structured data.

    Holds no per-call state: one instance can be shared across threads.
    """

    # Confidence is tied to presence, not computed
    CONFIDENCE = MappingProxyType({
        'amount': 0.9,
        'date': 0.8,
        'vendor': 0.7,
    })

    # Vendor name is expected in the receipt header
    VENDOR_LINES = 3
    VENDOR_MIN_LENGTH = 4
    VENDOR_MAX_LENGTH = 50

    # Lines that are only numbers, dates, prices or separators
    _DIGITS_ONLY = re.compile(r'^\d+$')
    _NUMERIC_NOISE = re.compile(r'^[\d\s\-/.,$]+$')

    def __init__(self, amount_patterns: Tuple[PatternSpec, ...] = AMOUNT_PATTERNS,
                 date_patterns: Tuple[PatternSpec, ...] = DATE_PATTERNS):
        self.amount_patterns = amount_patterns
        self.date_patterns = date_patterns

    def parse(self, text: str, today: Optional[date] = None) -> ExtractionResult:
        """
        Parse receipt text and extract all available fields.

        Args:
            text: OCR-extracted text from receipt, unmodified
            today: Reference day for the date validity window (defaults to today)

        Returns:
            ExtractionResult; missing fields are None with confidence 0.0
        """
        lines = self.normalize_lines(text)

        amount = self.extract_amount(lines)
        receipt_date = self.extract_date(lines, today=today)
        vendor = self.extract_vendor(lines)

        result = ExtractionResult(
            amount=amount,
            date=receipt_date,
            vendor=vendor,
            category=suggest_category(vendor),
            confidence=FieldConfidence(
                amount=self.CONFIDENCE['amount'] if amount is not None else 0.0,
                date=self.CONFIDENCE['date'] if receipt_date is not None else 0.0,
                vendor=self.CONFIDENCE['vendor'] if vendor is not None else 0.0,
            ),
            raw_text=text,
        )

        logger.debug("Parsed receipt text", extra={
            "line_count": len(lines),
            "amount": str(amount) if amount is not None else None,
            "date": receipt_date,
            "vendor": vendor,
            "category": result.category,
        })

        return result

    @staticmethod
    def normalize_lines(text: str) -> List[str]:
        """Split text into trimmed, non-empty lines, keeping their order."""
        if not text:
            return []
        return [line.strip() for line in text.splitlines() if line.strip()]

    def extract_amount(self, lines: List[str]) -> Optional[Decimal]:
        """
        Extract the receipt total.

        Every labeled or currency-looking number on every line is a candidate;
        the largest plausible one is taken as the total.

        Args:
            lines: Normalized receipt lines

        Returns:
            Amount as Decimal or None
        """
        candidates = []

        for line in lines:
            for spec in self.amount_patterns:
                for match in spec.compiled.finditer(line):
                    amount = parse_money(match.group(1))
                    if is_plausible_amount(amount):
                        candidates.append(amount)

        if not candidates:
            return None

        return max(candidates)

    def extract_date(self, lines: List[str], today: Optional[date] = None) -> Optional[str]:
        """
        Extract receipt date.

        Lines are scanned in order and, within a line, patterns in table
        order. The first candidate that is a real date inside the validity
        window wins.

        Args:
            lines: Normalized receipt lines
            today: Reference day for the validity window

        Returns:
            Date in YYYY-MM-DD format or None
        """
        for line in lines:
            for spec in self.date_patterns:
                match = spec.compiled.search(line)
                if not match:
                    continue

                logger.debug("Found potential date", extra={
                    "date_str": match.group(0),
                    "line": line,
                    "format": spec.format_tag,
                })

                parsed = self.parse_date(match.groups(), spec.format_tag, today=today)
                if parsed:
                    logger.debug("Date accepted", extra={"date": parsed})
                    return parsed

        return None

    def parse_date(self, groups: Tuple[str, ...], format_tag: str,
                   today: Optional[date] = None) -> Optional[str]:
        """
        Build and validate a date from captured groups.

        Args:
            groups: Regex groups, ordered as the format tag describes
            format_tag: One of the FMT_* tags
            today: Reference day for the validity window

        Returns:
            Date in YYYY-MM-DD format, or None if not a real date or outside the window
        """
        try:
            if format_tag == FMT_ISO:
                year, month, day = int(groups[0]), int(groups[1]), int(groups[2])
            elif format_tag in (FMT_DMY_SLASH, FMT_DMY_DASH):
                day, month, year = int(groups[0]), int(groups[1]), int(groups[2])
            elif format_tag in (FMT_DMY_SLASH_SHORT, FMT_DMY_DASH_SHORT):
                day, month = int(groups[0]), int(groups[1])
                year = expand_two_digit_year(groups[2])
            elif format_tag == FMT_MONTH_FIRST:
                month, day, year = month_from_name(groups[0]), int(groups[1]), int(groups[2])
            elif format_tag == FMT_DAY_FIRST:
                day, month, year = int(groups[0]), month_from_name(groups[1]), int(groups[2])
            else:
                return None

            if month is None:
                raise ValueError(f"unknown month name in {groups}")

            candidate = date(year, month, day)

        except (ValueError, TypeError) as e:
            logger.debug("Date rejected", extra={
                "groups": groups,
                "format": format_tag,
                "reason": "invalid_calendar_date",
                "error": str(e),
            })
            return None

        if not is_within_window(candidate, today):
            logger.debug("Date rejected", extra={
                "date": candidate.isoformat(),
                "reason": "outside_window",
            })
            return None

        return candidate.isoformat()

    def extract_vendor(self, lines: List[str]) -> Optional[str]:
        """
        Extract vendor/merchant name from the receipt header.

        Args:
            lines: Normalized receipt lines

        Returns:
            First plausible header line, truncated to 50 characters, or None
        """
        for line in lines[:self.VENDOR_LINES]:
            if len(line) < self.VENDOR_MIN_LENGTH:
                continue
            if self._DIGITS_ONLY.match(line):
                continue
            if self._NUMERIC_NOISE.match(line):
                continue
            return line[:self.VENDOR_MAX_LENGTH]

        return None


_default_parser = ReceiptParser()


def parse_receipt_text(text: str, today: Optional[date] = None) -> ExtractionResult:
    """Parse OCR text with the default pattern tables."""
    return _default_parser.parse(text, today=today)
