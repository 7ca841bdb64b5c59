from __future__ import annotations

import re

from pocket_ledger.core.lexicon import Lexicon
from pocket_ledger.modules.extraction.classification import classify_category
from pocket_ledger.modules.extraction.models import TransactionType

_NUMERIC_TOKEN_RE = re.compile(r"[$]?[0-9.,/\-]+")
_MERCHANT_MIN_LEN = 3
_MERCHANT_MAX_LEN = 40
_MERCHANT_SCAN_LINES = 5


def extract_concept(text: str, transaction_type: TransactionType, *, lexicon: Lexicon) -> str:
    """Counterparty or purpose of a chat message; never empty.

    Looks for "<preposition> [article] <phrase>" in preposition order, drops
    trailing amounts and date words from the phrase and capitalizes it.
    """
    lowered = (text or "").lower()
    is_income = transaction_type == TransactionType.INCOME

    concept = _phrase_after_preposition(lowered, lexicon)
    if concept:
        concept = _capitalize(concept)
        if is_income and _mentions_freelance(concept.lower(), lowered, lexicon):
            if concept.lower() == lexicon.freelance_label.lower():
                return lexicon.freelance_label
            return f"{lexicon.freelance_label}: {concept}"
        return concept

    if is_income:
        if _mentions_freelance("", lowered, lexicon):
            return lexicon.freelance_label
        return lexicon.variable_income_label

    category = classify_category(text, lexicon=lexicon)
    if category != lexicon.other_category:
        return _capitalize(category)
    return lexicon.unspecified_label


def extract_merchant(text: str, *, lexicon: Lexicon) -> str:
    """Merchant name from the header of a receipt.

    Takes the first of the leading non-empty lines that is not a total/tax-id
    style line, does not start with a digit, and has a plausible length.
    """
    lines = [ln.strip() for ln in (text or "").splitlines() if ln.strip()]
    for line in lines[:_MERCHANT_SCAN_LINES]:
        if lexicon.merchant_reject_pattern.search(line) or line[0].isdigit():
            continue
        if _MERCHANT_MIN_LEN < len(line) < _MERCHANT_MAX_LEN:
            return line

    category = classify_category(text, lexicon=lexicon)
    if category != lexicon.other_category:
        return _capitalize(category)
    return lexicon.unidentified_merchant_label


def _phrase_after_preposition(lowered: str, lexicon: Lexicon) -> str | None:
    articles = "|".join(re.escape(a) for a in lexicon.concept_articles)
    for prep in lexicon.concept_prepositions:
        pattern = rf"\b{re.escape(prep)}\s+(?:(?:{articles})\s+)?([\w\s]+)"
        m = re.search(pattern, lowered)
        if not m:
            continue
        phrase = _strip_trailing_noise(m.group(1), lexicon)
        if phrase:
            return phrase
    return None


def _strip_trailing_noise(phrase: str, lexicon: Lexicon) -> str:
    words = phrase.split()
    while words and (
        words[-1] in lexicon.concept_trailing_words or _NUMERIC_TOKEN_RE.fullmatch(words[-1])
    ):
        words.pop()
    return " ".join(words)


def _mentions_freelance(concept: str, lowered_text: str, lexicon: Lexicon) -> bool:
    return any(m in concept or m in lowered_text for m in lexicon.freelance_markers)


def _capitalize(value: str) -> str:
    return value[:1].upper() + value[1:]
