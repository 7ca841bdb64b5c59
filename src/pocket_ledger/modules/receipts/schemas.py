from __future__ import annotations

from pydantic import BaseModel, Field

from pocket_ledger.modules.ledger.schemas import TransactionOut


class ReceiptTextIn(BaseModel):
    text: str = Field(min_length=1)


class ReceiptOut(BaseModel):
    record: TransactionOut
    stored: bool
