from __future__ import annotations

import time
from io import BytesIO
from typing import Protocol

import pytesseract
from PIL import Image

from pocket_ledger.core.config import settings
from pocket_ledger.core.logging import get_logger, log_event, log_exception, monotonic_ms

logger = get_logger(__name__)


class OcrError(RuntimeError):
    pass


class TextRecognizer(Protocol):
    def recognize(self, image: bytes) -> str: ...


class TesseractRecognizer:
    def __init__(self, lang: str | None = None):
        self.lang = lang or settings.tesseract_lang

    def recognize(self, image: bytes) -> str:
        start = time.monotonic()
        try:
            img = Image.open(BytesIO(image))
            if img.mode not in {"RGB", "L"}:
                img = img.convert("RGB")
            text = pytesseract.image_to_string(img, lang=self.lang) or ""
        except (OSError, pytesseract.TesseractError) as e:
            log_exception(logger, "ocr.failure", lang=self.lang, image_bytes=len(image))
            raise OcrError(f"Could not recognize receipt text: {e}") from e
        log_event(
            logger,
            "ocr.success",
            lang=self.lang,
            text_length=len(text),
            duration_ms=monotonic_ms(start),
        )
        return text


_recognizer: TextRecognizer | None = None


def get_recognizer() -> TextRecognizer:
    global _recognizer  # noqa: PLW0603
    if _recognizer is not None:
        return _recognizer
    _recognizer = TesseractRecognizer()
    return _recognizer
