from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pocket_ledger.modules.budget.schemas import BudgetOutcomeOut
from pocket_ledger.modules.extraction.models import Intent
from pocket_ledger.modules.ledger.schemas import TransactionOut


class MessageIn(BaseModel):
    text: str = Field(min_length=1)


class MessageOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    intent: Intent
    record: TransactionOut | None
    stored: bool
    needs_clarification: bool
    budget: BudgetOutcomeOut | None
