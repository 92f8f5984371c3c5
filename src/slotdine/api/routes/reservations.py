from __future__ import annotations

from fastapi import APIRouter

from slotdine.application.dto.responses import ReservationLookupResponse
from slotdine.application.use_cases.get_reservation import GetReservation
from slotdine.infrastructure.config import decoration_fee
from slotdine.infrastructure.db.repositories.ledger_repo import SqlAlchemyLedgerRepository
from slotdine.infrastructure.db.repositories.reservation_repo import (
    SqlAlchemyReservationRepository,
)

router = APIRouter(tags=["reservations"])


def _get_reservation_use_case() -> GetReservation:
    return GetReservation(
        reservation_repository=SqlAlchemyReservationRepository(),
        ledger_repository=SqlAlchemyLedgerRepository(),
        decoration_fee=decoration_fee(),
    )


@router.get("/v1/reservations/{ticket_id}", response_model=ReservationLookupResponse)
def get_reservation(ticket_id: str) -> ReservationLookupResponse:
    return _get_reservation_use_case().execute(ticket_id)
