"""
ExpenseTrack receipt extraction.

Turns raw OCR text from a receipt into an amount, date, vendor and
suggested spending category.
"""

__version__ = "0.1.0"

from expensetrack.models.receipt import ExtractionResult, FieldConfidence, ReceiptRecord
from expensetrack.services.parser import ReceiptParser, parse_receipt_text

__all__ = [
    "ExtractionResult",
    "FieldConfidence",
    "ReceiptRecord",
    "ReceiptParser",
    "parse_receipt_text",
]
