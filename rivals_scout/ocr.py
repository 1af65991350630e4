"""
Text recognition for uploaded loading-screen screenshots.

Thin adapter over Tesseract: the image is handed over as-is, no cropping or
thresholding is applied.
"""

from __future__ import annotations

import io
import logging
from typing import Optional

import pytesseract
from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)


class OCRError(RuntimeError):
    """Raised when the screenshot cannot be read or recognized."""


def recognize_text(image_bytes: bytes, language: str = "eng", tesseract_cmd: Optional[str] = None) -> str:
    """
    Run OCR over an image buffer.

    Args:
        image_bytes: Raw bytes of a PNG/JPEG upload
        language: Tesseract language identifier
        tesseract_cmd: Optional path to the tesseract binary

    Returns:
        Recognized text as a single string

    Raises:
        OCRError: If the bytes are not an image or Tesseract fails
    """
    if not image_bytes:
        raise OCRError("Empty image payload")

    if tesseract_cmd:
        pytesseract.pytesseract.tesseract_cmd = tesseract_cmd

    try:
        with Image.open(io.BytesIO(image_bytes)) as img:
            img.load()
            text = pytesseract.image_to_string(img, lang=language)
    except UnidentifiedImageError as exc:
        raise OCRError(f"Unsupported image format: {exc}") from exc
    except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError, OSError) as exc:
        raise OCRError(f"Text recognition failed: {exc}") from exc

    logger.info("OCR recognized %d characters", len(text))
    return text
