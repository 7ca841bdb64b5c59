from __future__ import annotations

from fastapi import APIRouter, Depends

from pocket_ledger.api.deps import store_dep
from pocket_ledger.core.storage import JsonDocumentStore
from pocket_ledger.modules.ledger.schemas import BudgetOut, TransactionOut
from pocket_ledger.modules.ledger.service import load_ledger

router = APIRouter(tags=["ledger"])


@router.get("/transactions", response_model=list[TransactionOut])
def list_transactions_endpoint(
    store: JsonDocumentStore = Depends(store_dep),
) -> list[TransactionOut]:
    ledger = load_ledger(store=store)
    return [TransactionOut.model_validate(t) for t in ledger.transactions]


@router.get("/budget", response_model=BudgetOut)
def get_budget_endpoint(store: JsonDocumentStore = Depends(store_dep)) -> BudgetOut:
    return BudgetOut(limits=load_ledger(store=store).budget)
