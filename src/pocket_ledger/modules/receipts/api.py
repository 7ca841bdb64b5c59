from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from pocket_ledger.api.deps import lexicon_dep, now_dep, recognizer_dep, store_dep
from pocket_ledger.core.lexicon import Lexicon
from pocket_ledger.core.logging import get_logger, log_event
from pocket_ledger.core.storage import JsonDocumentStore, StorageError
from pocket_ledger.modules.extraction.models import TransactionRecord
from pocket_ledger.modules.ledger.schemas import TransactionOut
from pocket_ledger.modules.ledger.service import register_transaction
from pocket_ledger.modules.receipts.ocr import OcrError, TextRecognizer
from pocket_ledger.modules.receipts.schemas import ReceiptOut, ReceiptTextIn
from pocket_ledger.modules.receipts.service import interpret_receipt_text, process_receipt_image

router = APIRouter(tags=["receipts"])
logger = get_logger(__name__)


@router.post("/receipts", response_model=ReceiptOut)
async def upload_receipt(
    upload: UploadFile = File(...),
    lexicon: Lexicon = Depends(lexicon_dep),
    store: JsonDocumentStore = Depends(store_dep),
    recognizer: TextRecognizer = Depends(recognizer_dep),
    now: datetime = Depends(now_dep),
) -> ReceiptOut:
    body = await upload.read()
    log_event(
        logger,
        "upload.received",
        filename=upload.filename or "receipt.bin",
        content_type=upload.content_type,
        byte_size=len(body),
    )
    try:
        record = process_receipt_image(body, recognizer=recognizer, lexicon=lexicon, now=now)
    except OcrError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)
        ) from e
    return _store_receipt(record, store=store)


@router.post("/receipts/text", response_model=ReceiptOut)
def interpret_receipt_text_endpoint(
    payload: ReceiptTextIn,
    lexicon: Lexicon = Depends(lexicon_dep),
    store: JsonDocumentStore = Depends(store_dep),
    now: datetime = Depends(now_dep),
) -> ReceiptOut:
    record = interpret_receipt_text(payload.text, lexicon=lexicon, now=now)
    return _store_receipt(record, store=store)


def _store_receipt(record: TransactionRecord, *, store: JsonDocumentStore) -> ReceiptOut:
    stored = False
    if record.is_usable:
        try:
            register_transaction(record, store=store)
        except StorageError as e:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)
            ) from e
        stored = True
    return ReceiptOut(record=TransactionOut.model_validate(record), stored=stored)
