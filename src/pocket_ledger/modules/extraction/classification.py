from __future__ import annotations

from pocket_ledger.core.lexicon import Lexicon
from pocket_ledger.modules.extraction.amounts import extract_amount
from pocket_ledger.modules.extraction.models import Intent


def classify_category(text: str, *, lexicon: Lexicon) -> str:
    """First category (in declared order) with a keyword contained in ``text``."""
    lowered = (text or "").lower()
    for category, keywords in lexicon.categories.items():
        if any(kw in lowered for kw in keywords):
            return category
    return lexicon.other_category


def classify_intent(text: str, *, lexicon: Lexicon) -> Intent:
    lowered = (text or "").lower()
    for intent, keywords in lexicon.intents.items():
        if any(kw in lowered for kw in keywords):
            return Intent(intent)
    if extract_amount(text, lexicon=lexicon) is not None:
        return Intent.EXPENSE
    return Intent.UNKNOWN


def match_budget_category(name: str, *, lexicon: Lexicon) -> str | None:
    """Best-scoring category for a free-text category name, or ``None``.

    A category key or keyword scores the length of the shorter string when
    either of it and the name contains the other; a keyword found inside the
    name thus scores its own length. Only a strictly higher score replaces the
    current best, so ties keep the category declared first.
    """
    needle = (name or "").strip().lower()
    if not needle:
        return None

    best: str | None = None
    best_score = 0
    for category, keywords in lexicon.categories.items():
        for candidate in (category, *keywords):
            score = _containment_score(candidate, needle)
            if score > best_score:
                best, best_score = category, score
    return best


def _containment_score(candidate: str, needle: str) -> int:
    if not candidate:
        return 0
    if needle in candidate or candidate in needle:
        return min(len(candidate), len(needle))
    return 0
