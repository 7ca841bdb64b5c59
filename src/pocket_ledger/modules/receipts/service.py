from __future__ import annotations

import re
import time
from datetime import datetime

from pocket_ledger.core.lexicon import Lexicon
from pocket_ledger.core.logging import get_logger, log_event, monotonic_ms
from pocket_ledger.modules.extraction.amounts import first_amount, normalize_amount
from pocket_ledger.modules.extraction.classification import classify_category
from pocket_ledger.modules.extraction.concepts import extract_merchant
from pocket_ledger.modules.extraction.dates import extract_receipt_date
from pocket_ledger.modules.extraction.models import LineItem, TransactionRecord, TransactionType
from pocket_ledger.modules.receipts.ocr import TextRecognizer

logger = get_logger(__name__)

_ITEM_LINE_RE = re.compile(r"^(.+?)\s+[$€]?\s*([0-9.,]*[0-9][0-9.,]*)$")
_MIN_LABEL_LEN = 3


def extract_total(text: str, *, lexicon: Lexicon) -> str | None:
    """Labelled totals ("TOTAL", "IMPORTE") first, then any currency-symbol amount."""
    return first_amount(lexicon.receipt_total_patterns, text)


def extract_items(text: str, *, lexicon: Lexicon) -> tuple[LineItem, ...]:
    items: list[LineItem] = []
    for raw_line in (text or "").splitlines():
        line = raw_line.strip()
        if not line:
            continue
        m = _ITEM_LINE_RE.match(line)
        if not m:
            continue
        label = m.group(1).strip()
        lowered = label.lower()
        if len(label) < _MIN_LABEL_LEN or any(x in lowered for x in lexicon.item_exclusions):
            continue
        price = normalize_amount(m.group(2))
        if price:
            items.append(LineItem(label=label, price=price))
    return tuple(items)


def interpret_receipt_text(text: str, *, lexicon: Lexicon, now: datetime) -> TransactionRecord:
    start = time.monotonic()
    text = text or ""
    record = TransactionRecord(
        type=TransactionType.EXPENSE,
        amount=extract_total(text, lexicon=lexicon),
        date=extract_receipt_date(text, lexicon=lexicon, today=now.date()),
        concept=extract_merchant(text, lexicon=lexicon),
        category=classify_category(text, lexicon=lexicon),
        raw_text=text,
        created_at=now,
        items=extract_items(text, lexicon=lexicon),
    )
    log_event(
        logger,
        "receipt.interpreted",
        has_amount=record.amount is not None,
        category=record.category,
        item_count=len(record.items),
        text_length=len(text),
        duration_ms=monotonic_ms(start),
    )
    return record


def process_receipt_image(
    image: bytes, *, recognizer: TextRecognizer, lexicon: Lexicon, now: datetime
) -> TransactionRecord:
    """OCR a receipt photo and interpret the recognized text.

    Raises ``OcrError`` when the image cannot be recognized.
    """
    text = recognizer.recognize(image)
    return interpret_receipt_text(text, lexicon=lexicon, now=now)
