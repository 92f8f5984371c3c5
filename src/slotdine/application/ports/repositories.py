from __future__ import annotations

from typing import Protocol

from slotdine.domain.booking.entities import Reservation
from slotdine.domain.common.ids import LedgerName, TicketId
from slotdine.domain.order.entities import OrderRecord


class ReservationRepository(Protocol):
    def get(self, ticket_id: TicketId) -> Reservation | None: ...


class LedgerRepository(Protocol):
    def get(self, ticket_id: TicketId, ledger: LedgerName) -> OrderRecord | None: ...

    def list_for_ticket(self, ticket_id: TicketId) -> list[OrderRecord]: ...

    def save(self, record: OrderRecord) -> OrderRecord: ...
