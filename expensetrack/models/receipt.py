"""
Pydantic models for receipt extraction.
"""

from pydantic import BaseModel
from typing import Optional
from decimal import Decimal


class FieldConfidence(BaseModel):
    """Per-field confidence. Each value is a fixed constant tied to field presence."""
    amount: float = 0.0
    date: float = 0.0
    vendor: float = 0.0

    class Config:
        frozen = True


class ExtractionResult(BaseModel):
    """Structured fields extracted from one receipt's OCR text."""
    amount: Optional[Decimal] = None
    date: Optional[str] = None  # YYYY-MM-DD
    vendor: Optional[str] = None
    category: str = "Other"
    confidence: FieldConfidence = FieldConfidence()
    raw_text: str = ""

    class Config:
        frozen = True


class ReceiptRecord(BaseModel):
    """
    Receipt as held by the caller.

    Fields the user supplied take precedence over extracted ones; see
    ``apply_extraction`` in the extraction service.
    """
    amount: Optional[Decimal] = None
    date: Optional[str] = None
    description: str = ""
    vendor: str = ""
    category: Optional[str] = None
    processed: bool = False
    extracted_data: Optional[ExtractionResult] = None
