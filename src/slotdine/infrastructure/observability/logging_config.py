from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import IO, Any, Iterable

from opentelemetry import trace

from slotdine.api.middleware.request_id import get_request_id

_LOGGING_CONFIGURED = False

# structured extras copied from ``logger.x(..., extra={...})`` calls
CONTEXT_FIELDS: tuple[str, ...] = (
    "method",
    "path",
    "status_code",
    "duration_ms",
    "ticket_id",
    "ledger",
    "action",
    "order_status",
    "record_key",
    "reason",
    "services",
)

# client libraries whose per-call lines repeat the access log
_QUIET_LOGGERS = ("httpx", "httpcore")


def _trace_context() -> dict[str, str]:
    span_context = trace.get_current_span().get_span_context()
    if not span_context.is_valid:
        return {}
    return {
        "trace_id": format(span_context.trace_id, "032x"),
        "span_id": format(span_context.span_id, "016x"),
    }


class JsonFormatter(logging.Formatter):
    """One JSON object per line, tagged with request and trace ids."""

    def __init__(self, service: str, fields: Iterable[str] = CONTEXT_FIELDS) -> None:
        super().__init__()
        self._service = service
        self._fields = tuple(fields)

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "service": self._service,
            "logger": record.name,
            "message": record.getMessage(),
        }
        request_id = get_request_id()
        if request_id:
            payload["request_id"] = request_id
        payload.update(_trace_context())

        payload.update(
            {
                key: getattr(record, key)
                for key in self._fields
                if getattr(record, key, None) is not None
            }
        )

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


def configure_logging(level: str | None = None, stream: IO[str] | None = None) -> None:
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JsonFormatter(service=os.getenv("OTEL_SERVICE_NAME", "slotdine-backend")))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel((level or os.getenv("LOG_LEVEL", "INFO")).upper())
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _LOGGING_CONFIGURED = True
