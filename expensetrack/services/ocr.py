"""
OCR service for extracting text from receipt images and PDFs.
"""

import base64
import binascii
import io
import logging
import re
from typing import Protocol, Dict, Any

import pytesseract
from PIL import Image, ImageEnhance
from pdf2image import convert_from_bytes
import PyPDF2

from expensetrack.config import settings

logger = logging.getLogger(__name__)

IMAGE_EXTS = ('.jpg', '.jpeg', '.png', '.gif', '.bmp', '.tif', '.tiff', '.webp')

# PDFs with less direct text than this are treated as scans
MIN_PDF_TEXT_LENGTH = 50


class OCRProcessingError(Exception):
    """Raised when no usable text can be obtained for a receipt."""


class TextDetector(Protocol):
    """Anything that turns image bytes into newline-delimited text."""

    def detect_text(self, image_data: bytes) -> str:
        ...


def decode_image_payload(payload: str) -> bytes:
    """
    Decode a base64 image, with or without a ``data:image/...;base64,`` prefix.

    Raises:
        OCRProcessingError: If the payload is not valid base64
    """
    stripped = re.sub(r'^data:image/[a-z]+;base64,', '', payload.strip())
    try:
        return base64.b64decode(stripped, validate=True)
    except (binascii.Error, ValueError) as e:
        raise OCRProcessingError(f"Invalid image payload: {e}") from e


class OCRService:
    """Tesseract-backed text detector for receipt files."""

    def __init__(self, tesseract_cmd: str = None, config: str = None):
        """Initialize OCR service with Tesseract configuration."""
        pytesseract.pytesseract.tesseract_cmd = tesseract_cmd or settings.TESSERACT_CMD
        self.config = config or settings.TESSERACT_CONFIG

    def detect_text(self, image_data: bytes) -> str:
        """
        Extract text from an image using Tesseract OCR.

        Args:
            image_data: Raw image bytes (JPEG, PNG, etc.)

        Returns:
            Extracted text with line breaks preserved
        """
        image = Image.open(io.BytesIO(image_data))
        image = self._preprocess_image(image)
        return pytesseract.image_to_string(image, config=self.config)

    def extract_text_from_pdf(self, pdf_data: bytes) -> str:
        """
        Extract text from a PDF file.
        First tries to extract text directly, then falls back to OCR.

        Args:
            pdf_data: Raw PDF bytes

        Returns:
            Extracted text
        """
        text = self._extract_pdf_text_direct(pdf_data)

        if len(text.strip()) < MIN_PDF_TEXT_LENGTH:
            logger.debug("PDF appears to be image-based, using OCR")
            text = self._extract_pdf_text_ocr(pdf_data)

        return text

    def _extract_pdf_text_direct(self, pdf_data: bytes) -> str:
        reader = PyPDF2.PdfReader(io.BytesIO(pdf_data))
        return "\n".join((page.extract_text() or "") for page in reader.pages)

    def _extract_pdf_text_ocr(self, pdf_data: bytes) -> str:
        pages = []
        for image in convert_from_bytes(pdf_data):
            image = self._preprocess_image(image)
            pages.append(pytesseract.image_to_string(image, config=self.config))
        return "\n".join(pages)

    def _preprocess_image(self, image: Image.Image) -> Image.Image:
        """
        Preprocess image to improve OCR accuracy.

        Args:
            image: PIL Image object

        Returns:
            Grayscale image with boosted contrast
        """
        if image.mode != 'RGB':
            image = image.convert('RGB')

        image = image.convert('L')

        # Helps with faded thermal paper
        return ImageEnhance.Contrast(image).enhance(2.0)

    def extract_text_from_file(self, file_data: bytes, mime_type: str, filename: str = "") -> str:
        """
        Extract text from a file (auto-detects format).

        Args:
            file_data: Raw file bytes
            mime_type: MIME type of the file
            filename: Optional filename for extension detection

        Returns:
            Extracted text

        Raises:
            OCRProcessingError: If the file type is not supported
        """
        mime_type = mime_type or ""
        is_pdf = mime_type == 'application/pdf' or filename.lower().endswith('.pdf')
        is_image = mime_type.startswith('image/') or filename.lower().endswith(IMAGE_EXTS)

        if is_pdf:
            return self.extract_text_from_pdf(file_data)
        if is_image:
            return self.detect_text(file_data)

        raise OCRProcessingError(f"Unsupported file type: {mime_type or filename}")

    def self_test(self) -> Dict[str, Any]:
        """Check that the Tesseract binary can be reached."""
        try:
            version = pytesseract.get_tesseract_version()
        except (pytesseract.TesseractNotFoundError, OSError) as e:
            logger.error("OCR service test failed", exc_info=True)
            return {"success": False, "message": str(e)}

        logger.info("OCR service initialized successfully", extra={"tesseract_version": str(version)})
        return {"success": True, "message": f"OCR service is ready (tesseract {version})"}
