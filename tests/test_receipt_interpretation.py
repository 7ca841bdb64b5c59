from __future__ import annotations

from datetime import datetime
from io import BytesIO
from zoneinfo import ZoneInfo

import pytest
from PIL import Image

from pocket_ledger.modules.extraction.models import LineItem, TransactionType
from pocket_ledger.modules.receipts import ocr as ocr_module
from pocket_ledger.modules.receipts.ocr import OcrError, TesseractRecognizer
from pocket_ledger.modules.receipts.service import (
    extract_items,
    extract_total,
    interpret_receipt_text,
    process_receipt_image,
)

NOW = datetime(2024, 3, 10, 12, 0, tzinfo=ZoneInfo("America/Bogota"))

RECEIPT = """SUPERMERCADO EXITO
FECHA: 09/03/2024
Leche 3.200
Pan 1.500
SUBTOTAL $ 4.700
IVA 300
TOTAL $ 23.500
"""


def test_total_and_single_item(lexicon):
    record = interpret_receipt_text("TOTAL $ 23.500\nLeche 3.200", lexicon=lexicon, now=NOW)
    assert record.amount == "23.500"
    assert record.items == (LineItem(label="Leche", price="3.200"),)


def test_full_receipt(lexicon):
    record = interpret_receipt_text(RECEIPT, lexicon=lexicon, now=NOW)
    assert record.type == TransactionType.EXPENSE
    assert record.amount == "23.500"
    assert record.date == "2024-03-09"
    assert record.concept == "SUPERMERCADO EXITO"
    assert record.category == "supermercado"
    assert record.raw_text == RECEIPT
    assert record.created_at == NOW


def test_items_exclude_totals_and_tax(lexicon):
    assert extract_items(RECEIPT, lexicon=lexicon) == (
        LineItem(label="Leche", price="3.200"),
        LineItem(label="Pan", price="1.500"),
    )


def test_items_reject_short_labels(lexicon):
    assert extract_items("Te 2.000\n$ 8.000\nCafé 4,5", lexicon=lexicon) == (
        LineItem(label="Café", price="4.5"),
    )


def test_subtotal_never_wins_total(lexicon):
    assert extract_total("SUBTOTAL 4.700\nTOTAL: 5.000", lexicon=lexicon) == "5.000"


def test_bare_currency_amount_is_last_resort(lexicon):
    assert extract_total("Tienda Local\n$ 8.000", lexicon=lexicon) == "8.000"
    assert extract_total("IMPORTE 1200\n$ 8.000", lexicon=lexicon) == "1200"


def test_empty_text_yields_record_without_amount(lexicon):
    record = interpret_receipt_text("", lexicon=lexicon, now=NOW)
    assert record.amount is None
    assert not record.is_usable
    assert record.date == "2024-03-10"
    assert record.concept == "Comercio no identificado"
    assert record.category == "otros"
    assert record.items == ()


def test_process_receipt_image_uses_recognizer(lexicon):
    class _Recognizer:
        def __init__(self) -> None:
            self.calls: list[bytes] = []

        def recognize(self, image: bytes) -> str:
            self.calls.append(image)
            return RECEIPT

    recognizer = _Recognizer()
    record = process_receipt_image(b"img", recognizer=recognizer, lexicon=lexicon, now=NOW)
    assert recognizer.calls == [b"img"]
    assert record.amount == "23.500"


def test_process_receipt_image_propagates_ocr_error(lexicon):
    class _Broken:
        def recognize(self, image: bytes) -> str:
            raise OcrError("engine down")

    with pytest.raises(OcrError):
        process_receipt_image(b"img", recognizer=_Broken(), lexicon=lexicon, now=NOW)


def test_tesseract_recognizer_rejects_undecodable_image():
    with pytest.raises(OcrError):
        TesseractRecognizer(lang="spa").recognize(b"not an image")


def test_tesseract_recognizer_passes_language(monkeypatch):
    calls: list[tuple[str, str]] = []

    def _image_to_string(image, lang: str) -> str:
        calls.append((image.mode, lang))
        return "TOTAL $ 100"

    monkeypatch.setattr(ocr_module.pytesseract, "image_to_string", _image_to_string)

    buf = BytesIO()
    Image.new("RGBA", (8, 8), "white").save(buf, format="PNG")
    text = TesseractRecognizer(lang="spa").recognize(buf.getvalue())

    assert text == "TOTAL $ 100"
    assert calls == [("RGB", "spa")]


def test_tesseract_engine_failure_becomes_ocr_error(monkeypatch):
    def _image_to_string(image, lang: str) -> str:
        raise ocr_module.pytesseract.TesseractError(1, "missing language data")

    monkeypatch.setattr(ocr_module.pytesseract, "image_to_string", _image_to_string)

    buf = BytesIO()
    Image.new("L", (8, 8)).save(buf, format="PNG")
    with pytest.raises(OcrError):
        TesseractRecognizer(lang="xyz").recognize(buf.getvalue())
