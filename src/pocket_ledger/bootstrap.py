from __future__ import annotations

from pocket_ledger.modules.ledger.service import initialize_ledger


def bootstrap() -> None:
    initialize_ledger()
