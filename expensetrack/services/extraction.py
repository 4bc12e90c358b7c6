"""
Receipt extraction: OCR boundary, parsing, and merge into the caller's record.
"""

import logging
from datetime import date
from typing import Optional

from expensetrack.config import settings
from expensetrack.models.receipt import ExtractionResult, ReceiptRecord
from expensetrack.services.ocr import IMAGE_EXTS, OCRProcessingError, OCRService, decode_image_payload
from expensetrack.services.parser import ReceiptParser

logger = logging.getLogger(__name__)


def apply_extraction(record: ReceiptRecord, result: ExtractionResult) -> ReceiptRecord:
    """
    Merge extracted fields into a receipt without overwriting user input.

    Args:
        record: Receipt as supplied by the user
        result: Extraction result for the receipt image

    Returns:
        New ReceiptRecord marked as processed
    """
    updates = {
        "processed": True,
        "extracted_data": result,
    }

    if record.amount is None and result.amount is not None:
        updates["amount"] = result.amount
    if record.date is None and result.date is not None:
        updates["date"] = result.date
    if not record.description and result.vendor:
        updates["description"] = result.vendor
    if not record.vendor and result.vendor:
        updates["vendor"] = result.vendor
    if record.category is None:
        updates["category"] = result.category

    return record.model_copy(update=updates)


class ReceiptExtractionService:
    """Runs OCR on a receipt file and parses the text into an ExtractionResult."""

    def __init__(self, detector=None, parser: Optional[ReceiptParser] = None):
        """
        Args:
            detector: Text detector; an OCRService is created when omitted
            parser: Receipt parser; the default tables are used when omitted
        """
        self.detector = detector if detector is not None else OCRService()
        self.parser = parser or ReceiptParser()

    def extract_receipt_data(
        self,
        file_data: bytes,
        mime_type: str = "image/png",
        filename: str = "",
        today: Optional[date] = None,
    ) -> ExtractionResult:
        """
        Extract structured receipt data from an image or PDF.

        Args:
            file_data: Raw file bytes
            mime_type: MIME type of the file
            filename: Optional filename for extension detection
            today: Reference day for the date validity window

        Returns:
            ExtractionResult

        Raises:
            OCRProcessingError: If the file is refused, the detector fails, or no text is found
        """
        file_size_mb = len(file_data) / (1024 * 1024)
        if file_size_mb > settings.MAX_FILE_SIZE_MB:
            raise OCRProcessingError(
                f"OCR processing failed: File too large: {file_size_mb:.2f}MB. "
                f"Maximum: {settings.MAX_FILE_SIZE_MB}MB"
            )

        logger.debug("Running OCR", extra={"file_name": filename, "mime_type": mime_type})

        try:
            text = self._detect(file_data, mime_type, filename)
        except Exception as e:
            logger.error("OCR processing failed", extra={"file_name": filename}, exc_info=True)
            raise OCRProcessingError(f"OCR processing failed: {e}") from e

        if not text or not text.strip():
            logger.warning("No text detected", extra={"file_name": filename})
            raise OCRProcessingError("OCR processing failed: No text detected in image")

        logger.info("OCR processing complete", extra={
            "file_name": filename,
            "text_length": len(text),
        })

        return self.parser.parse(text, today=today)

    def extract_from_base64(self, payload: str, today: Optional[date] = None) -> ExtractionResult:
        """Extract from a base64 image string (``data:image/...;base64,`` prefix allowed)."""
        return self.extract_receipt_data(decode_image_payload(payload), today=today)

    def process_receipt(
        self,
        record: ReceiptRecord,
        file_data: bytes,
        mime_type: str = "image/png",
        filename: str = "",
        today: Optional[date] = None,
    ) -> ReceiptRecord:
        """Extract from the receipt file and fill the record's missing fields."""
        result = self.extract_receipt_data(file_data, mime_type, filename, today=today)
        return apply_extraction(record, result)

    def _detect(self, file_data: bytes, mime_type: str, filename: str) -> str:
        # Full OCRService handles PDFs; any other detector accepts images only
        if isinstance(self.detector, OCRService):
            return self.detector.extract_text_from_file(file_data, mime_type, filename)

        is_image = (mime_type or "").startswith('image/') or (
            not mime_type and filename.lower().endswith(IMAGE_EXTS)
        )
        if not is_image:
            raise OCRProcessingError(f"Unsupported file type: {mime_type or filename or 'unknown'}")

        return self.detector.detect_text(file_data)
