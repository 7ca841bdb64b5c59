"""Contents of a freshly initialized ledger document."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

FIXED_EXPENSES = (
    {"name": "Internet ETB", "amount": Decimal("120000"), "category": "servicios", "payment_day": 15},
    {"name": "Claude IA", "amount": Decimal("50000"), "category": "entretenimiento", "payment_day": 5},
    {"name": "Bodytech", "amount": Decimal("80000"), "category": "salud", "payment_day": 10},
    {"name": "WOM", "amount": Decimal("60000"), "category": "servicios", "payment_day": 20},
)

FIXED_INCOMES = (
    {"name": "Salario", "amount": Decimal("1718010"), "income_day": 15, "frequency": "mensual"},
)

FINANCIAL_GOALS = (
    {
        "name": "Pantalla nueva",
        "target_amount": Decimal("600000"),
        "saved_amount": Decimal("0"),
        "due_date": date(2024, 12, 31),
    },
    {
        "name": "Semestre universitario",
        "target_amount": Decimal("4000000"),
        "saved_amount": Decimal("0"),
        "due_date": date(2025, 1, 15),
    },
)

MONTHLY_BUDGET = {
    "supermercado": Decimal("450000"),
    "restaurante": Decimal("300000"),
    "transporte": Decimal("200000"),
    "servicios": Decimal("310000"),
    "entretenimiento": Decimal("150000"),
    "salud": Decimal("100000"),
    "tecnología": Decimal("200000"),
    "snacks": Decimal("80000"),
    "educación": Decimal("400000"),
    "otros": Decimal("100000"),
}
