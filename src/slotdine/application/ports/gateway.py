from __future__ import annotations

from typing import Any, Protocol

from slotdine.application.dto.requests import OrderMutationRequest
from slotdine.application.dto.responses import OrderMutationResponse, ReservationLookupResponse


class TicketNotFoundError(Exception):
    pass


class OrderGateway(Protocol):
    """Client view of the persistence boundary.

    ``fetch_reservation`` raises ``TicketNotFoundError`` for unknown tickets.
    ``submit_order_mutation`` returns ``success=False`` for rejected mutations
    and raises on transport failures.
    """

    async def fetch_reservation(self, ticket_id: str) -> ReservationLookupResponse: ...

    async def submit_order_mutation(
        self,
        ticket_id: str,
        ledger: str,
        request: OrderMutationRequest,
    ) -> OrderMutationResponse: ...

    async def fetch_menu(self) -> Any: ...
