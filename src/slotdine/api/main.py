from __future__ import annotations

import logging
import os
import time

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import Counter, Histogram
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from slotdine.api.error_handling import register_exception_handlers
from slotdine.api.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware
from slotdine.api.routes.health import router as health_router
from slotdine.api.routes.ledgers import router as ledgers_router
from slotdine.api.routes.menu import router as menu_router
from slotdine.api.routes.metrics import router as metrics_router
from slotdine.api.routes.reservations import router as reservations_router
from slotdine.infrastructure.observability.logging_config import configure_logging
from slotdine.infrastructure.observability.otel import configure_otel

logger = logging.getLogger("slotdine.api.access")

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total number of HTTP requests",
    ["method", "route", "status_code"],
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "route"],
)

DEFAULT_ALLOWED_ORIGINS = "https://book.slotdine.in"


def _cors_allow_origins() -> list[str]:
    if os.getenv("APP_ENV", "dev").lower() in {"dev", "test"}:
        return ["*"]
    raw_value = os.getenv("CORS_ALLOW_ORIGINS", DEFAULT_ALLOWED_ORIGINS)
    return [origin.strip() for origin in raw_value.split(",") if origin.strip()]


def _route_template(request: Request) -> str:
    # ticket ids stay out of metric labels
    path_format = getattr(request.scope.get("route"), "path_format", None)
    return path_format or "unmatched"


class AccessLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            self._observe(request, 500, started, failed=True)
            raise

        self._observe(request, response.status_code, started)
        return response

    def _observe(self, request: Request, status_code: int, started: float, failed: bool = False) -> None:
        elapsed = time.perf_counter() - started
        route = _route_template(request)
        REQUEST_COUNT.labels(method=request.method, route=route, status_code=str(status_code)).inc()
        REQUEST_LATENCY.labels(method=request.method, route=route).observe(elapsed)

        extra = {
            "method": request.method,
            "path": request.url.path,
            "status_code": status_code,
            "duration_ms": round(elapsed * 1000, 2),
        }
        if failed:
            logger.exception("request_error", extra=extra)
        else:
            logger.info("request_complete", extra=extra)


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(title="SlotDine Ordering API", version="0.1.0")
    register_exception_handlers(app)
    for router in (health_router, metrics_router, menu_router, reservations_router, ledgers_router):
        app.include_router(router)

    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_allow_origins(),
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )

    configure_otel(app)
    return app


app = create_app()
