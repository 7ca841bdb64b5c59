from __future__ import annotations

from pocket_ledger.modules.extraction.concepts import extract_concept, extract_merchant
from pocket_ledger.modules.extraction.models import TransactionType


def test_concept_after_preposition_drops_trailing_date_word(lexicon):
    text = "Gasté $45000 en el supermercado ayer"
    assert extract_concept(text, TransactionType.EXPENSE, lexicon=lexicon) == "Supermercado"


def test_concept_drops_trailing_amount(lexicon):
    text = "compré zapatos para mi hermana 85000"
    assert extract_concept(text, TransactionType.EXPENSE, lexicon=lexicon) == "Mi hermana"


def test_expense_without_phrase_falls_back_to_category(lexicon):
    assert extract_concept("uber 12000", TransactionType.EXPENSE, lexicon=lexicon) == "Transporte"


def test_expense_without_phrase_or_category(lexicon):
    text = "pagué 5000"
    assert extract_concept(text, TransactionType.EXPENSE, lexicon=lexicon) == "No especificado"


def test_income_project_is_tagged_freelance(lexicon):
    text = "Cobré 500000 por proyecto web"
    assert extract_concept(text, TransactionType.INCOME, lexicon=lexicon) == "Freelance: Proyecto web"


def test_income_without_phrase(lexicon):
    assert extract_concept("recibí 300000", TransactionType.INCOME, lexicon=lexicon) == (
        "Ingreso variable"
    )
    assert extract_concept("cobré 300000 freelance", TransactionType.INCOME, lexicon=lexicon) == (
        "Freelance"
    )


def test_merchant_is_first_plausible_header_line(lexicon):
    text = "\n  SUPERMERCADO EXITO  \nNIT 900123456\nTOTAL $ 23.500"
    assert extract_merchant(text, lexicon=lexicon) == "SUPERMERCADO EXITO"


def test_merchant_skips_ticket_and_numeric_lines(lexicon):
    text = "TICKET 0001\n123 Calle Falsa\nFarmacia Central\nTOTAL 5000"
    assert extract_merchant(text, lexicon=lexicon) == "Farmacia Central"


def test_merchant_falls_back_to_unidentified(lexicon):
    assert extract_merchant("12345\nTOTAL 5000", lexicon=lexicon) == "Comercio no identificado"
    assert extract_merchant("", lexicon=lexicon) == "Comercio no identificado"
