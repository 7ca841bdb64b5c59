from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from decimal import Decimal

from pocket_ledger.core.lexicon import Lexicon
from pocket_ledger.core.logging import get_logger, log_event
from pocket_ledger.core.storage import JsonDocumentStore
from pocket_ledger.modules.extraction.amounts import normalize_amount
from pocket_ledger.modules.extraction.classification import match_budget_category
from pocket_ledger.modules.ledger.service import load_ledger, set_budget_limit

logger = get_logger(__name__)

_KEYWORDS = r"(?:presupuesto|asignar|destinar)"
_ARTICLE = r"(?:(?:el|la|los|las)\s+)?"
_AMOUNT = r"\$?\s*([0-9][0-9.,]*)"

# "asignar presupuesto de $200000 para restaurantes"
_AMOUNT_FIRST_RE = re.compile(
    rf"(?i)\b{_KEYWORDS}\s+(?:de\s+)?{_AMOUNT}\s+(?:para|a|en)\s+{_ARTICLE}(.+?)\s*$"
)
# "presupuesto para transporte de 250000"
_CATEGORY_FIRST_RE = re.compile(
    rf"(?i)\b{_KEYWORDS}\s+(?:(?:para|a|en)\s+)?{_ARTICLE}(.+?)\s+(?:de\s+)?{_AMOUNT}"
)
_LEADING_NUMBER_RE = re.compile(r"[0-9]+(?:\.[0-9]+)?")


class BudgetAction(str, enum.Enum):
    STATUS = "status"
    UPDATED = "updated"
    UNMATCHED = "unmatched"


@dataclass(frozen=True)
class BudgetUpdate:
    category_name: str
    amount: Decimal


@dataclass(frozen=True)
class BudgetOutcome:
    action: BudgetAction
    category: str | None = None
    amount: Decimal | None = None
    requested_category: str | None = None
    budget: dict[str, Decimal] | None = None


def is_status_query(text: str, *, lexicon: Lexicon) -> bool:
    lowered = (text or "").lower()
    return any(re.search(rf"\b{re.escape(w)}\b", lowered) for w in lexicon.budget_query_words)


def parse_budget_update(text: str) -> BudgetUpdate | None:
    m = _AMOUNT_FIRST_RE.search(text or "")
    if m:
        raw_amount, name = m.group(1), m.group(2)
    else:
        m = _CATEGORY_FIRST_RE.search(text or "")
        if not m:
            return None
        name, raw_amount = m.group(1), m.group(2)

    amount = _parse_limit(raw_amount)
    name = name.strip(" .,;:!?").lower()
    if amount is None or not name:
        return None
    return BudgetUpdate(category_name=name, amount=amount)


def handle_budget_message(
    text: str, *, lexicon: Lexicon, store: JsonDocumentStore | None = None
) -> BudgetOutcome:
    """Update one category's monthly limit from a chat message.

    Status questions and messages without a recognizable "<category> <amount>"
    pair report the current budget instead.
    """
    update = None if is_status_query(text, lexicon=lexicon) else parse_budget_update(text)
    if update is None:
        return BudgetOutcome(action=BudgetAction.STATUS, budget=load_ledger(store=store).budget)
    return apply_budget_update(update, lexicon=lexicon, store=store)


def apply_budget_update(
    update: BudgetUpdate, *, lexicon: Lexicon, store: JsonDocumentStore | None = None
) -> BudgetOutcome:
    category = match_budget_category(update.category_name, lexicon=lexicon)
    if category is None:
        log_event(
            logger,
            "budget.category.unmatched",
            requested_category=update.category_name,
        )
        return BudgetOutcome(
            action=BudgetAction.UNMATCHED,
            amount=update.amount,
            requested_category=update.category_name,
        )

    ledger = set_budget_limit(category, update.amount, store=store)
    return BudgetOutcome(
        action=BudgetAction.UPDATED,
        category=category,
        amount=update.amount,
        requested_category=update.category_name,
        budget=ledger.budget,
    )


def _parse_limit(raw: str) -> Decimal | None:
    # Reads the leading number only, so "1.234.567" is 1.234.
    m = _LEADING_NUMBER_RE.match(normalize_amount(raw))
    return Decimal(m.group(0)) if m else None
