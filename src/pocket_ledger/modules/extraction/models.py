from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


class TransactionType(str, enum.Enum):
    EXPENSE = "expense"
    INCOME = "income"


class Intent(str, enum.Enum):
    EXPENSE = "expense"
    INCOME = "income"
    GOAL = "goal"
    REPORT = "report"
    BUDGET = "budget"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class LineItem:
    label: str
    price: str


@dataclass(frozen=True)
class TransactionRecord:
    type: TransactionType
    amount: str | None
    date: str
    concept: str
    category: str
    raw_text: str
    created_at: datetime
    items: tuple[LineItem, ...] = field(default_factory=tuple)

    @property
    def is_usable(self) -> bool:
        return self.amount is not None

    def to_document(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "amount": self.amount,
            "date": self.date,
            "concept": self.concept,
            "category": self.category,
            "rawText": self.raw_text,
            "items": [{"label": i.label, "price": i.price} for i in self.items],
            "createdAt": self.created_at.isoformat(),
        }
