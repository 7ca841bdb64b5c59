from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from pocket_ledger.modules.extraction.models import TransactionType


class LineItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    label: str
    price: str


class TransactionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    type: TransactionType
    amount: str | None
    date: str
    concept: str
    category: str
    raw_text: str
    items: list[LineItemOut]
    created_at: datetime | None


class BudgetOut(BaseModel):
    limits: dict[str, Decimal]
