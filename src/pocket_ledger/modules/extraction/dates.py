from __future__ import annotations

import re
from collections.abc import Callable
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from pocket_ledger.core.config import settings
from pocket_ledger.core.lexicon import Lexicon


def processing_now() -> datetime:
    return datetime.now(ZoneInfo(settings.timezone))


def format_date(d: date) -> str:
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def extract_date(text: str, *, lexicon: Lexicon, today: date) -> str:
    """Return the transaction date as ``YYYY-MM-DD``.

    Explicit "el 05/03[/24]" dates win over relative words ("hoy", "ayer",
    "anteayer"); without either, the processing date is used.
    """
    for rule in _CHAT_RULES:
        found = rule(text or "", lexicon, today)
        if found is not None:
            return format_date(found)
    return format_date(today)


def extract_receipt_date(text: str, *, lexicon: Lexicon, today: date) -> str:
    found = _receipt_date(text or "", lexicon)
    if found is not None:
        return format_date(found)
    return extract_date(text, lexicon=lexicon, today=today)


def expand_year(year: int) -> int:
    if year < 100:
        return year + (2000 if year < 50 else 1900)
    return year


def _explicit_date(text: str, lexicon: Lexicon, today: date) -> date | None:
    for pattern in lexicon.date_patterns:
        for m in pattern.finditer(text):
            day, month, year = m.group(1), m.group(2), m.group(3)
            full_year = expand_year(int(year)) if year else today.year
            found = _safe_date(full_year, int(month), int(day))
            if found is not None:
                return found
    return None


def _relative_date(text: str, lexicon: Lexicon, today: date) -> date | None:
    lowered = text.lower()
    for word, days_back in lexicon.relative_dates:
        if re.search(rf"\b{re.escape(word)}\b", lowered):
            return today - timedelta(days=days_back)
    return None


def _receipt_date(text: str, lexicon: Lexicon) -> date | None:
    for pattern in lexicon.receipt_date_patterns:
        for m in pattern.finditer(text):
            first, second, third = (int(g) for g in m.groups())
            if first > 31:
                found = _safe_date(expand_year(first), second, third)
            else:
                found = _safe_date(expand_year(third), second, first)
            if found is not None:
                return found
    return None


def _safe_date(year: int, month: int, day: int) -> date | None:
    try:
        return date(year, month, day)
    except ValueError:
        return None


_CHAT_RULES: tuple[Callable[[str, Lexicon, date], date | None], ...] = (
    _explicit_date,
    _relative_date,
)
