from __future__ import annotations

import os
import shutil
from pathlib import Path

import pytest

# Set env before any pocket_ledger imports (settings are created at import time).
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATA_DIR", ".tmp_ledger_test")
os.environ.setdefault("TIMEZONE", "America/Bogota")


@pytest.fixture(autouse=True)
def _reset_store_and_lexicon() -> None:
    import pocket_ledger.core.storage as storage_mod
    from pocket_ledger.core.lexicon import get_lexicon

    storage_mod._store = None
    get_lexicon.cache_clear()

    data_dir = Path(os.environ["DATA_DIR"])
    if data_dir.exists():
        shutil.rmtree(data_dir)

    yield

    get_lexicon.cache_clear()


@pytest.fixture
def lexicon():
    from pocket_ledger.core.lexicon import build_lexicon

    return build_lexicon()


@pytest.fixture
def store(tmp_path):
    from pocket_ledger.core.storage import JsonDocumentStore

    return JsonDocumentStore(tmp_path / "financial_data.json")
