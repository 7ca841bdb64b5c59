from __future__ import annotations

from datetime import datetime

from pocket_ledger.core.lexicon import Lexicon, get_lexicon
from pocket_ledger.core.storage import JsonDocumentStore, get_store
from pocket_ledger.modules.extraction.dates import processing_now
from pocket_ledger.modules.receipts.ocr import TextRecognizer, get_recognizer


def lexicon_dep() -> Lexicon:
    return get_lexicon()


def store_dep() -> JsonDocumentStore:
    return get_store()


def recognizer_dep() -> TextRecognizer:
    return get_recognizer()


def now_dep() -> datetime:
    return processing_now()
