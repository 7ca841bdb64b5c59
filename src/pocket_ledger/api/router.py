from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from pocket_ledger.core.storage import diagnose_storage
from pocket_ledger.modules.ledger.api import router as ledger_router
from pocket_ledger.modules.messages.api import router as messages_router
from pocket_ledger.modules.receipts.api import router as receipts_router

router = APIRouter()

router.include_router(messages_router, prefix="/api")
router.include_router(receipts_router, prefix="/api")
router.include_router(ledger_router, prefix="/api")


@router.get("/healthz")
def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/healthz/storage")
def healthz_storage(*, write_test: bool = False) -> JSONResponse:
    result = diagnose_storage(write_test=write_test)
    status_code = 200 if result.get("ok") else 503
    return JSONResponse(status_code=status_code, content=result)
