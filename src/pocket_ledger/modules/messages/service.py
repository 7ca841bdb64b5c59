from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime

from pocket_ledger.core.lexicon import Lexicon, get_lexicon
from pocket_ledger.core.logging import get_logger, log_event, monotonic_ms
from pocket_ledger.core.storage import JsonDocumentStore
from pocket_ledger.modules.budget.service import BudgetOutcome, handle_budget_message
from pocket_ledger.modules.extraction.amounts import extract_amount
from pocket_ledger.modules.extraction.classification import classify_category, classify_intent
from pocket_ledger.modules.extraction.concepts import extract_concept
from pocket_ledger.modules.extraction.dates import extract_date, processing_now
from pocket_ledger.modules.extraction.models import Intent, TransactionRecord, TransactionType
from pocket_ledger.modules.ledger.service import register_transaction

logger = get_logger(__name__)

_TRANSACTION_INTENTS = {
    Intent.EXPENSE: TransactionType.EXPENSE,
    Intent.INCOME: TransactionType.INCOME,
}


@dataclass(frozen=True)
class MessageOutcome:
    intent: Intent
    record: TransactionRecord | None = None
    stored: bool = False
    budget: BudgetOutcome | None = None

    @property
    def needs_clarification(self) -> bool:
        return self.record is not None and not self.record.is_usable


def detect_transaction_type(text: str, *, lexicon: Lexicon) -> TransactionType:
    lowered = (text or "").lower()
    for kind in (TransactionType.EXPENSE, TransactionType.INCOME):
        if any(kw in lowered for kw in lexicon.intents.get(kind.value, ())):
            return kind
    return TransactionType.EXPENSE


def interpret_message(
    text: str,
    transaction_type: TransactionType | None = None,
    *,
    lexicon: Lexicon,
    now: datetime,
) -> TransactionRecord:
    """Build a transaction record from a free-text chat message.

    Each field is extracted independently from the same text. A record whose
    ``amount`` is ``None`` is returned as-is; callers treat it as a request for
    clarification.
    """
    text = text or ""
    kind = transaction_type or detect_transaction_type(text, lexicon=lexicon)
    if kind == TransactionType.EXPENSE:
        category = classify_category(text, lexicon=lexicon)
    else:
        category = lexicon.income_category

    return TransactionRecord(
        type=kind,
        amount=extract_amount(text, lexicon=lexicon),
        date=extract_date(text, lexicon=lexicon, today=now.date()),
        concept=extract_concept(text, kind, lexicon=lexicon),
        category=category,
        raw_text=text,
        created_at=now,
    )


def handle_message(
    text: str,
    *,
    lexicon: Lexicon | None = None,
    store: JsonDocumentStore | None = None,
    now: datetime | None = None,
) -> MessageOutcome:
    start = time.monotonic()
    lexicon = lexicon or get_lexicon()
    now = now or processing_now()

    intent = classify_intent(text, lexicon=lexicon)
    log_event(logger, "message.received", intent=intent.value, text_length=len(text or ""))

    if intent in _TRANSACTION_INTENTS:
        record = interpret_message(text, _TRANSACTION_INTENTS[intent], lexicon=lexicon, now=now)
        stored = False
        if record.is_usable:
            register_transaction(record, store=store)
            stored = True
        outcome = MessageOutcome(intent=intent, record=record, stored=stored)
    elif intent == Intent.BUDGET:
        outcome = MessageOutcome(
            intent=intent,
            budget=handle_budget_message(text, lexicon=lexicon, store=store),
        )
    else:
        outcome = MessageOutcome(intent=intent)

    log_event(
        logger,
        "message.handled",
        intent=intent.value,
        stored=outcome.stored,
        needs_clarification=outcome.needs_clarification,
        duration_ms=monotonic_ms(start),
    )
    return outcome
