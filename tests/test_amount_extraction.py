from __future__ import annotations

from pocket_ledger.modules.extraction.amounts import extract_amount, normalize_amount


def test_currency_symbol_amount(lexicon):
    assert extract_amount("Gasté $45000 en el supermercado", lexicon=lexicon) == "45000"


def test_currency_symbol_beats_amount_before_preposition(lexicon):
    text = "Pagué 300 en taxi, total $1500"
    assert extract_amount(text, lexicon=lexicon) == "1500"


def test_amount_followed_by_pesos_or_currency_code(lexicon):
    assert extract_amount("me costaron 1500 pesos", lexicon=lexicon) == "1500"
    assert extract_amount("compré algo de 20 usd", lexicon=lexicon) == "20"


def test_amount_after_expense_verb(lexicon):
    assert extract_amount("pagué 8000", lexicon=lexicon) == "8000"


def test_amount_before_preposition(lexicon):
    assert extract_amount("45000 en pan", lexicon=lexicon) == "45000"


def test_first_comma_becomes_decimal_point(lexicon):
    assert extract_amount("Gasté $12,50 en café", lexicon=lexicon) == "12.50"


def test_trailing_sentence_punctuation_is_trimmed(lexicon):
    assert extract_amount("Gasté $45000.", lexicon=lexicon) == "45000"


def test_text_without_digits_has_no_amount(lexicon):
    assert extract_amount("hola, ¿cómo va todo?", lexicon=lexicon) is None
    assert extract_amount("", lexicon=lexicon) is None
    assert extract_amount("gasté $, nada", lexicon=lexicon) is None


def test_normalize_amount_does_not_infer_thousands_separators():
    assert normalize_amount("1,234,567") == "1.234,567"
    assert normalize_amount(" 23.500 ") == "23.500"


def test_amount_followed_by_currency_symbol(lexicon):
    assert extract_amount("me costó 500$", lexicon=lexicon) == "500"


def test_trailing_symbol_beats_currency_code_and_preposition(lexicon):
    assert extract_amount("pagué 500$ o 20 usd", lexicon=lexicon) == "500"
    assert extract_amount("30 en pan y 1200$ de queso", lexicon=lexicon) == "1200"
