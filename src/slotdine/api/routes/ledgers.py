from __future__ import annotations

from fastapi import APIRouter

from slotdine.application.dto.requests import OrderMutationRequest, OrderStatusUpdateRequest
from slotdine.application.dto.responses import LedgerOrderResponse, OrderMutationResponse
from slotdine.application.use_cases.submit_order_mutation import SubmitOrderMutation
from slotdine.application.use_cases.update_order_status import UpdateOrderStatus
from slotdine.infrastructure.config import decoration_fee
from slotdine.infrastructure.db.repositories.ledger_repo import SqlAlchemyLedgerRepository
from slotdine.infrastructure.db.repositories.reservation_repo import (
    SqlAlchemyReservationRepository,
)

router = APIRouter(tags=["ledgers"])


def _submit_order_mutation_use_case() -> SubmitOrderMutation:
    return SubmitOrderMutation(
        reservation_repository=SqlAlchemyReservationRepository(),
        ledger_repository=SqlAlchemyLedgerRepository(),
        decoration_fee=decoration_fee(),
    )


def _update_order_status_use_case() -> UpdateOrderStatus:
    return UpdateOrderStatus(
        ledger_repository=SqlAlchemyLedgerRepository(),
        decoration_fee=decoration_fee(),
    )


@router.post(
    "/v1/reservations/{ticket_id}/ledgers/{ledger_name}/mutations",
    response_model=OrderMutationResponse,
)
def submit_order_mutation(
    ticket_id: str,
    ledger_name: str,
    request_dto: OrderMutationRequest,
) -> OrderMutationResponse:
    return _submit_order_mutation_use_case().execute(
        ticket_id=ticket_id,
        ledger_name=ledger_name,
        request_dto=request_dto,
    )


@router.post(
    "/v1/reservations/{ticket_id}/ledgers/{ledger_name}/status",
    response_model=LedgerOrderResponse,
)
def update_order_status(
    ticket_id: str,
    ledger_name: str,
    request_dto: OrderStatusUpdateRequest,
) -> LedgerOrderResponse:
    return _update_order_status_use_case().execute(
        ticket_id=ticket_id,
        ledger_name=ledger_name,
        status=request_dto.status,
    )
