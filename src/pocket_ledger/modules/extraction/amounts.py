from __future__ import annotations

import re
from collections.abc import Iterable

from pocket_ledger.core.lexicon import Lexicon


def extract_amount(text: str, *, lexicon: Lexicon) -> str | None:
    """Return the amount matched by the first amount pattern that hits, or ``None``.

    Patterns are tried in lexicon order; a currency-symbol prefix therefore beats
    a bare number followed by "en"/"por" even when both occur in the text.
    """
    return first_amount(lexicon.amount_patterns, text)


def first_amount(patterns: Iterable[re.Pattern[str]], text: str) -> str | None:
    for pattern in patterns:
        m = pattern.search(text or "")
        if m and m.group(1):
            amount = normalize_amount(m.group(1))
            if amount:
                return amount
    return None


def normalize_amount(raw: str) -> str:
    """Trim sentence punctuation and read the first comma as the decimal point.

    No thousands-separator inference: "1,234,567" becomes "1.234,567".
    """
    s = raw.strip().rstrip(".,")
    return s.replace(",", ".", 1)
