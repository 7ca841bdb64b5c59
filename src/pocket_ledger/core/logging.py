from __future__ import annotations

import contextvars
import json
import logging
import os
import time
import uuid
from datetime import datetime, timezone
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

ROOT_LOGGER = "pocket_ledger"

_request_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)
# Telegram-style chat identifier forwarded by the bot front-end.
_chat_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "chat_id", default=None
)

_configured = False


class JsonFormatter(logging.Formatter):
    """One JSON object per line; ``log_event`` fields are flattened into it."""

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: dict[str, Any] = {
            "ts": ts.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "event": getattr(record, "event", None) or record.getMessage(),
        }
        for key, value in (getattr(record, "fields", None) or {}).items():
            # Envelope keys win; a clashing field is kept under a prefixed name.
            payload[f"field_{key}" if key in payload else key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, ensure_ascii=False)


def configure_logging() -> None:
    global _configured  # noqa: PLW0603
    if _configured:
        return
    level = logging.getLevelNamesMapping().get(
        os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO
    )
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(level)
    root.handlers = [handler]
    root.propagate = False
    _configured = True


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(name)


def bind_request_context(
    *, request_id: str | None, chat_id: str | None = None
) -> tuple[contextvars.Token, contextvars.Token]:
    return _request_id_var.set(request_id), _chat_id_var.set(chat_id)


def reset_request_context(tokens: tuple[contextvars.Token, contextvars.Token]) -> None:
    request_token, chat_token = tokens
    _request_id_var.reset(request_token)
    _chat_id_var.reset(chat_token)


def _event_fields(fields: dict[str, Any]) -> dict[str, Any]:
    context = {"request_id": _request_id_var.get(), "chat_id": _chat_id_var.get()}
    return {k: v for k, v in {**context, **fields}.items() if v is not None}


def log_event(
    logger: logging.Logger, event: str, *, level: int = logging.INFO, **fields: Any
) -> None:
    logger.log(level, event, extra={"event": event, "fields": _event_fields(fields)})


def log_exception(logger: logging.Logger, event: str, **fields: Any) -> None:
    logger.exception(event, extra={"event": event, "fields": _event_fields(fields)})


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        tokens = bind_request_context(
            request_id=request_id, chat_id=request.headers.get("x-chat-id")
        )
        start = time.monotonic()
        try:
            response = await call_next(request)
        except Exception:
            log_exception(
                get_logger(__name__),
                "http.request.error",
                method=request.method,
                path=request.url.path,
            )
            raise
        else:
            log_event(
                get_logger(__name__),
                "http.request.completed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=monotonic_ms(start),
            )
            response.headers["x-request-id"] = request_id
            return response
        finally:
            reset_request_context(tokens)


def monotonic_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)
