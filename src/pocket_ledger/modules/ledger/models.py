from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from pocket_ledger.modules.ledger import seed


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FixedExpense(_CamelModel):
    name: str
    amount: Decimal
    category: str
    payment_day: int = Field(ge=1, le=31)


class FixedIncome(_CamelModel):
    name: str
    amount: Decimal
    income_day: int = Field(ge=1, le=31)
    frequency: str = "mensual"


class FinancialGoal(_CamelModel):
    name: str
    target_amount: Decimal
    saved_amount: Decimal = Decimal("0")
    due_date: date | None = None


class StoredLineItem(_CamelModel):
    label: str
    price: str


class StoredTransaction(_CamelModel):
    model_config = ConfigDict(extra="allow")

    type: str
    amount: str | None
    date: str
    concept: str
    category: str
    raw_text: str = ""
    items: list[StoredLineItem] = Field(default_factory=list)
    created_at: datetime | None = None

    @field_validator("amount", mode="before")
    @classmethod
    def _amount_as_string(cls, v: Any) -> Any:
        # Older documents may hold plain JSON numbers.
        if isinstance(v, (int, float, Decimal)) and not isinstance(v, bool):
            return str(v)
        return v


class LedgerDocument(_CamelModel):
    transactions: list[StoredTransaction] = Field(default_factory=list)
    fixed_expenses: list[FixedExpense] = Field(
        default_factory=lambda: [FixedExpense(**e) for e in seed.FIXED_EXPENSES]
    )
    fixed_incomes: list[FixedIncome] = Field(
        default_factory=lambda: [FixedIncome(**i) for i in seed.FIXED_INCOMES]
    )
    financial_goals: list[FinancialGoal] = Field(
        default_factory=lambda: [FinancialGoal(**g) for g in seed.FINANCIAL_GOALS]
    )
    budget: dict[str, Decimal] = Field(default_factory=lambda: dict(seed.MONTHLY_BUDGET))

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
