from __future__ import annotations

from decimal import Decimal

from pocket_ledger.modules.budget.service import (
    BudgetAction,
    BudgetUpdate,
    handle_budget_message,
    is_status_query,
    parse_budget_update,
)
from pocket_ledger.modules.ledger.service import load_ledger


def test_parse_amount_first_update():
    update = parse_budget_update("asignar presupuesto de $200000 para restaurantes")
    assert update == BudgetUpdate(category_name="restaurantes", amount=Decimal("200000"))


def test_parse_category_first_update():
    update = parse_budget_update("presupuesto para transporte de 250000")
    assert update == BudgetUpdate(category_name="transporte", amount=Decimal("250000"))


def test_parse_without_amount():
    assert parse_budget_update("presupuesto") is None
    assert parse_budget_update("asignar presupuesto para comida") is None


def test_status_query_words_need_word_boundaries(lexicon):
    assert is_status_query("ver presupuesto", lexicon=lexicon)
    assert is_status_query("Estado del presupuesto", lexicon=lexicon)
    assert not is_status_query("presupuesto para verduras de 1000", lexicon=lexicon)


def test_update_writes_matched_category_limit(lexicon, store):
    outcome = handle_budget_message(
        "asignar presupuesto de $200000 para restaurantes", lexicon=lexicon, store=store
    )
    assert outcome.action == BudgetAction.UPDATED
    assert outcome.category == "restaurante"
    assert outcome.requested_category == "restaurantes"
    assert outcome.amount == Decimal("200000")

    ledger = load_ledger(store=store)
    assert ledger.budget["restaurante"] == Decimal("200000")
    assert ledger.budget["supermercado"] == Decimal("450000")


def test_unmatched_category_leaves_ledger_untouched(lexicon, store):
    outcome = handle_budget_message(
        "presupuesto para mascotas de 5000", lexicon=lexicon, store=store
    )
    assert outcome.action == BudgetAction.UNMATCHED
    assert outcome.category is None
    assert outcome.requested_category == "mascotas"
    assert not store.exists()


def test_status_query_reports_current_budget(lexicon, store):
    outcome = handle_budget_message("ver estado del presupuesto", lexicon=lexicon, store=store)
    assert outcome.action == BudgetAction.STATUS
    assert outcome.budget is not None
    assert outcome.budget["supermercado"] == Decimal("450000")
