from __future__ import annotations

import json
import os
import tempfile
import threading
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any

from pocket_ledger.core.config import settings
from pocket_ledger.core.logging import get_logger, log_event, log_exception, monotonic_ms

logger = get_logger(__name__)

Document = dict[str, Any]


class StorageError(RuntimeError):
    pass


class JsonDocumentStore:
    """Whole-document JSON store.

    Every read-modify-write goes through :meth:`update`, which holds the store
    lock for the full cycle; saves replace the file atomically.
    """

    def __init__(self, path: Path, *, default_factory: Callable[[], Document] = dict):
        self._path = path
        self._default_factory = default_factory
        self._lock = threading.RLock()

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.exists()

    def load(self) -> Document:
        start = time.monotonic()
        if not self._path.exists():
            return self._default_factory()
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            log_exception(logger, "store.load.failure", path=str(self._path))
            return self._default_factory()
        if not isinstance(raw, dict):
            log_event(
                logger,
                "store.load.failure",
                path=str(self._path),
                reason="not_an_object",
                duration_ms=monotonic_ms(start),
            )
            return self._default_factory()
        return raw

    def save(self, document: Document) -> bool:
        start = time.monotonic()
        with self._lock:
            tmp_name = None
            try:
                self._path.parent.mkdir(parents=True, exist_ok=True)
                with tempfile.NamedTemporaryFile(
                    "w",
                    encoding="utf-8",
                    dir=self._path.parent,
                    prefix=f".{self._path.name}.",
                    suffix=".tmp",
                    delete=False,
                ) as fh:
                    tmp_name = fh.name
                    json.dump(document, fh, ensure_ascii=False, indent=2)
                os.replace(tmp_name, self._path)
            except (OSError, TypeError, ValueError):
                log_exception(logger, "store.save.failure", path=str(self._path))
                if tmp_name and os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                return False
        log_event(
            logger,
            "store.save.success",
            path=str(self._path),
            duration_ms=monotonic_ms(start),
        )
        return True

    def update(self, fn: Callable[[Document], Document]) -> Document:
        with self._lock:
            document = fn(self.load())
            if not self.save(document):
                raise StorageError(f"Could not save document: {self._path}")
            return document


_store: JsonDocumentStore | None = None


def get_store() -> JsonDocumentStore:
    global _store  # noqa: PLW0603
    if _store is not None:
        return _store
    _store = JsonDocumentStore(settings.ledger_path)
    return _store


def diagnose_storage(*, write_test: bool = False) -> dict[str, Any]:
    """Best-effort health check of the document store's directory."""
    path = settings.ledger_path
    result: dict[str, Any] = {"ok": True, "path": str(path), "exists": path.exists()}
    if not write_test:
        return result

    probe = JsonDocumentStore(path.parent / f".healthz-{time.time_ns()}.json")
    body = {"ok": True}
    ok = probe.save(body)
    out = probe.load() if ok else None
    if probe.exists():
        probe.path.unlink()

    result["write_test"] = {"ok": ok and out == body, "path": str(probe.path)}
    if not result["write_test"]["ok"]:
        result["ok"] = False
    return result
