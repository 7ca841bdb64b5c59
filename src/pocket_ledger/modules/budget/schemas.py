from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from pocket_ledger.modules.budget.service import BudgetAction


class BudgetOutcomeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    action: BudgetAction
    category: str | None
    amount: Decimal | None
    requested_category: str | None
    budget: dict[str, Decimal] | None
