from __future__ import annotations

from typing import Any, cast

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from slotdine.api.middleware.request_id import get_request_id
from slotdine.application.use_cases.get_menu import MenuFeedUnavailableError
from slotdine.application.use_cases.get_reservation import TicketNotFoundError
from slotdine.application.use_cases.submit_order_mutation import (
    InvalidLedgerError,
    InvalidOrderLineError,
    MutationRejectedError,
)
from slotdine.application.use_cases.update_order_status import (
    InvalidOrderTransitionError,
    OrderNotFoundError,
)
from slotdine.domain.order.entities import EmptyCartError


def _error_response(
    *,
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "details": jsonable_encoder(details or {}),
            },
            "requestId": get_request_id(),
        },
    )


def _exception_handler(status_code: int, code: str):
    async def handler(_: Request, exc: Exception) -> JSONResponse:
        details = getattr(exc, "details", None)
        return _error_response(
            status_code=status_code,
            code=code,
            message=str(exc),
            details=details if isinstance(details, dict) else None,
        )

    return handler


async def _mutation_rejected_handler(_: Request, exc: Exception) -> JSONResponse:
    # same shape as a successful mutation so clients can roll back from it
    rejected = cast(MutationRejectedError, exc)
    return JSONResponse(
        status_code=rejected.status_code,
        content={
            "success": False,
            "error": str(rejected),
            "code": rejected.code,
            "order": jsonable_encoder(rejected.order) if rejected.order else None,
            "requestId": get_request_id(),
        },
    )


async def _http_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    http_exc = cast(StarletteHTTPException, exc)
    message = str(http_exc.detail) if http_exc.detail else "request failed"
    code = "HTTP_ERROR"
    if http_exc.status_code == 404:
        code = "NOT_FOUND"
    elif http_exc.status_code == 400:
        code = "BAD_REQUEST"
    elif http_exc.status_code == 405:
        code = "METHOD_NOT_ALLOWED"
    elif http_exc.status_code == 409:
        code = "CONFLICT"
    return _error_response(
        status_code=http_exc.status_code,
        code=code,
        message=message,
    )


async def _validation_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    validation_exc = cast(RequestValidationError, exc)
    return _error_response(
        status_code=400,
        code="INVALID_REQUEST",
        message="request validation failed",
        details={
            "errors": [
                {key: value for key, value in error.items() if key != "ctx"}
                for error in validation_exc.errors()
            ]
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    mappings: list[tuple[type[Exception], int, str]] = [
        (TicketNotFoundError, 404, "TICKET_NOT_FOUND"),
        (InvalidLedgerError, 400, "INVALID_LEDGER"),
        (InvalidOrderLineError, 400, "INVALID_ORDER_LINE"),
        (EmptyCartError, 400, "EMPTY_CART"),
        (OrderNotFoundError, 404, "ORDER_NOT_FOUND"),
        (InvalidOrderTransitionError, 409, "INVALID_ORDER_TRANSITION"),
        (MenuFeedUnavailableError, 503, "MENU_FEED_UNAVAILABLE"),
    ]

    for exc_cls, status_code, code in mappings:
        app.add_exception_handler(exc_cls, _exception_handler(status_code, code))

    app.add_exception_handler(MutationRejectedError, _mutation_rejected_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
