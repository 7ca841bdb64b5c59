from __future__ import annotations

from decimal import Decimal

from pydantic import ValidationError

from pocket_ledger.core.logging import get_logger, log_event, log_exception
from pocket_ledger.core.storage import Document, JsonDocumentStore, StorageError, get_store
from pocket_ledger.modules.extraction.models import TransactionRecord
from pocket_ledger.modules.ledger.models import LedgerDocument, StoredTransaction

logger = get_logger(__name__)


def initialize_ledger(*, store: JsonDocumentStore | None = None) -> None:
    store = store or get_store()
    if store.exists():
        return
    if not store.save(LedgerDocument().to_json()):
        raise StorageError(f"Could not initialize ledger: {store.path}")
    log_event(logger, "ledger.initialized", path=str(store.path))


def load_ledger(*, store: JsonDocumentStore | None = None) -> LedgerDocument:
    """Current ledger; a document that does not fit the schema reads as the seeded default."""
    store = store or get_store()
    try:
        return LedgerDocument.model_validate(store.load())
    except ValidationError:
        log_exception(logger, "ledger.load.invalid", path=str(store.path))
        return LedgerDocument()


def register_transaction(
    record: TransactionRecord, *, store: JsonDocumentStore | None = None
) -> LedgerDocument:
    store = store or get_store()

    def _append(raw: Document) -> Document:
        ledger = _validate_for_update(raw, store)
        ledger.transactions.append(StoredTransaction.model_validate(record.to_document()))
        return ledger.to_json()

    saved = LedgerDocument.model_validate(store.update(_append))
    log_event(
        logger,
        "ledger.transaction.registered",
        type=record.type.value,
        category=record.category,
        amount=record.amount,
        transaction_count=len(saved.transactions),
    )
    return saved


def set_budget_limit(
    category: str, amount: Decimal, *, store: JsonDocumentStore | None = None
) -> LedgerDocument:
    store = store or get_store()

    def _set(raw: Document) -> Document:
        ledger = _validate_for_update(raw, store)
        ledger.budget[category] = amount
        return ledger.to_json()

    saved = LedgerDocument.model_validate(store.update(_set))
    log_event(logger, "ledger.budget.updated", category=category, amount=str(amount))
    return saved


def _validate_for_update(raw: Document, store: JsonDocumentStore) -> LedgerDocument:
    # Writing over a document we cannot read would discard it.
    try:
        return LedgerDocument.model_validate(raw)
    except ValidationError as e:
        log_exception(logger, "ledger.update.invalid", path=str(store.path))
        raise StorageError(f"Ledger document does not match the schema: {store.path}") from e
