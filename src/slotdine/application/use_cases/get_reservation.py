from __future__ import annotations

from slotdine.application.dto.responses import ReservationLookupResponse
from slotdine.application.mappers.order_mapper import to_ledger_order_response
from slotdine.application.mappers.reservation_mapper import to_reservation_response
from slotdine.application.ports.repositories import LedgerRepository, ReservationRepository
from slotdine.domain.booking.entities import normalize_ticket_id
from slotdine.domain.common.money import Money


class TicketNotFoundError(Exception):
    pass


class GetReservation:
    def __init__(
        self,
        reservation_repository: ReservationRepository,
        ledger_repository: LedgerRepository,
        decoration_fee: Money | None = None,
    ) -> None:
        self._reservation_repository = reservation_repository
        self._ledger_repository = ledger_repository
        self._decoration_fee = decoration_fee

    def execute(self, ticket_id: str) -> ReservationLookupResponse:
        normalized = normalize_ticket_id(ticket_id)
        if not normalized:
            raise TicketNotFoundError("Ticket number is required")

        reservation = self._reservation_repository.get(normalized)
        if reservation is None:
            raise TicketNotFoundError(f"Booking not found for ticket number {normalized}")

        existing_orders = {
            str(record.ledger): to_ledger_order_response(record, self._decoration_fee)
            for record in self._ledger_repository.list_for_ticket(normalized)
        }
        return ReservationLookupResponse(
            reservation=to_reservation_response(reservation),
            existingOrders=existing_orders,
        )
