#!/usr/bin/env python3
"""
Command-line entrypoint: extract receipt fields from an image, PDF or OCR text dump.
"""

import argparse
import json
import logging
import mimetypes
import sys
from datetime import date
from pathlib import Path

from expensetrack.config import settings
from expensetrack.services.extraction import ReceiptExtractionService
from expensetrack.services.ocr import OCRProcessingError, OCRService
from expensetrack.services.parser import ReceiptParser


def _parse_day(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a YYYY-MM-DD date: {value!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="expensetrack-extract",
        description="Extract amount, date, vendor and category from a receipt",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # OCR a photo of a receipt
  expensetrack-extract receipt.jpg

  # Parse text that was already OCR'd
  expensetrack-extract --text receipt.txt

  # Pin the reference day for the date window
  expensetrack-extract --text receipt.txt --today 2024-06-30
        """
    )
    parser.add_argument("path", nargs="?",
                        help="Receipt image/PDF, or text file with --text ('-' reads stdin)")
    parser.add_argument("--text", action="store_true",
                        help="Treat the input as OCR output and skip OCR")
    parser.add_argument("--today", type=_parse_day,
                        help="Reference day for the 5-year date window (default: today)")
    parser.add_argument("--include-raw", action="store_true",
                        help="Include the raw OCR text in the output")
    parser.add_argument("--self-test", action="store_true",
                        help="Check that Tesseract is available and exit")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Show detailed parsing information for debugging")
    return parser


def _read_text(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def main(argv=None) -> int:
    """Main CLI entrypoint."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.self_test:
        result = OCRService().self_test()
        print(result["message"])
        return 0 if result["success"] else 1

    if not args.path:
        print("[ERROR] a receipt path is required", file=sys.stderr)
        return 1

    try:
        if args.text:
            result = ReceiptParser().parse(_read_text(args.path), today=args.today)
        else:
            file_path = Path(args.path)
            mime_type, _ = mimetypes.guess_type(file_path.name)
            result = ReceiptExtractionService().extract_receipt_data(
                file_path.read_bytes(),
                mime_type=mime_type or "",
                filename=file_path.name,
                today=args.today,
            )
    except OCRProcessingError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1
    except (OSError, UnicodeDecodeError) as e:
        print(f"[ERROR] Could not read {args.path}: {e}", file=sys.stderr)
        return 1

    exclude = None if args.include_raw else {"raw_text"}
    print(json.dumps(result.model_dump(mode="json", exclude=exclude), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
