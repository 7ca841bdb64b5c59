from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, status

from pocket_ledger.api.deps import lexicon_dep, now_dep, store_dep
from pocket_ledger.core.lexicon import Lexicon
from pocket_ledger.core.storage import JsonDocumentStore, StorageError
from pocket_ledger.modules.messages.schemas import MessageIn, MessageOut
from pocket_ledger.modules.messages.service import handle_message

router = APIRouter(tags=["messages"])


@router.post("/messages", response_model=MessageOut)
def handle_message_endpoint(
    payload: MessageIn,
    lexicon: Lexicon = Depends(lexicon_dep),
    store: JsonDocumentStore = Depends(store_dep),
    now: datetime = Depends(now_dep),
) -> MessageOut:
    try:
        outcome = handle_message(payload.text, lexicon=lexicon, store=store, now=now)
    except StorageError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)) from e
    return MessageOut.model_validate(outcome)
