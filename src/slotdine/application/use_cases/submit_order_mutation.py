from __future__ import annotations

import logging
from datetime import datetime, timezone
from uuid import uuid4

from slotdine.application.dto.requests import OrderMutationRequest
from slotdine.application.dto.responses import LedgerOrderResponse, OrderMutationResponse
from slotdine.application.mappers.order_mapper import to_cart_line, to_ledger_order_response
from slotdine.application.metrics.order_lifecycle import (
    record_mutation,
    record_placed_items,
    record_transition,
)
from slotdine.application.ports.repositories import LedgerRepository, ReservationRepository
from slotdine.application.use_cases.get_reservation import TicketNotFoundError
from slotdine.domain.booking.entities import normalize_ticket_id
from slotdine.domain.common.ids import OrderedItemId
from slotdine.domain.common.money import Money
from slotdine.domain.order.cart import CartLine
from slotdine.domain.order.entities import (
    AlreadyDeliveredError,
    OrderedItemNotFoundError,
    OrderRecord,
    OrderTransitionError,
)
from slotdine.domain.order.ledgers import InvalidLedgerNameError, resolve_ledger

logger = logging.getLogger(__name__)


class MutationRejectedError(Exception):
    def __init__(
        self,
        message: str,
        code: str,
        status_code: int,
        order: LedgerOrderResponse | None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.status_code = status_code
        self.order = order


class InvalidLedgerError(Exception):
    pass


class InvalidOrderLineError(Exception):
    pass


def new_ordered_item_id() -> OrderedItemId:
    return OrderedItemId(f"oit_{uuid4().hex[:12]}")


class SubmitOrderMutation:
    def __init__(
        self,
        reservation_repository: ReservationRepository,
        ledger_repository: LedgerRepository,
        decoration_fee: Money | None = None,
    ) -> None:
        self._reservation_repository = reservation_repository
        self._ledger_repository = ledger_repository
        self._decoration_fee = decoration_fee

    def execute(
        self,
        ticket_id: str,
        ledger_name: str,
        request_dto: OrderMutationRequest,
    ) -> OrderMutationResponse:
        normalized = normalize_ticket_id(ticket_id)
        if not normalized or self._reservation_repository.get(normalized) is None:
            raise TicketNotFoundError(f"Booking not found for ticket number {normalized}")

        try:
            ledger = resolve_ledger(ledger_name)
        except InvalidLedgerNameError as exc:
            raise InvalidLedgerError(str(exc)) from exc

        current = self._ledger_repository.get(normalized, ledger.name) or OrderRecord(
            ticket_id=normalized,
            ledger=ledger.name,
        )
        action = _action_name(request_dto)
        now = datetime.now(timezone.utc)

        try:
            updated = current
            if request_dto.items is not None:
                lines = _cart_lines(request_dto, ledger.is_decoration)
                updated = updated.replace_items(lines, new_id=new_ordered_item_id, now=now)
            elif request_dto.remove_item_ids is not None:
                updated = updated.cancel_items(request_dto.remove_item_ids, now=now)
            if request_dto.mark_delivered:
                updated = updated.mark_delivered(now=now)
        except AlreadyDeliveredError as exc:
            raise self._rejected(current, action, exc, "ALREADY_DELIVERED", 409) from exc
        except OrderedItemNotFoundError as exc:
            raise self._rejected(current, action, exc, "ORDERED_ITEM_NOT_FOUND", 404) from exc
        except OrderTransitionError as exc:
            raise self._rejected(current, action, exc, "INVALID_ORDER_TRANSITION", 409) from exc

        persisted = self._ledger_repository.save(updated)
        record_mutation(ledger=str(ledger.name), action=action, outcome="applied")
        record_transition(from_status=current.status, to_status=persisted.status)
        if request_dto.items:
            record_placed_items(persisted)
        logger.info(
            "ledger_mutation_applied",
            extra={
                "ticket_id": str(normalized),
                "ledger": str(ledger.name),
                "action": action,
                "order_status": persisted.status.value,
            },
        )

        return OrderMutationResponse(
            success=True,
            order=to_ledger_order_response(persisted, self._decoration_fee),
        )

    def _rejected(
        self,
        current: OrderRecord,
        action: str,
        exc: Exception,
        code: str,
        status_code: int,
    ) -> MutationRejectedError:
        record_mutation(ledger=str(current.ledger), action=action, outcome="rejected")
        logger.info(
            "ledger_mutation_rejected",
            extra={
                "ticket_id": str(current.ticket_id),
                "ledger": str(current.ledger),
                "action": action,
                "order_status": current.status.value,
            },
        )
        return MutationRejectedError(
            str(exc),
            code=code,
            status_code=status_code,
            order=to_ledger_order_response(current, self._decoration_fee),
        )


def _cart_lines(request_dto: OrderMutationRequest, is_decoration: bool) -> list[CartLine]:
    try:
        return [to_cart_line(item, is_decoration) for item in request_dto.items or []]
    except ValueError as exc:
        raise InvalidOrderLineError(str(exc)) from exc


def _action_name(request_dto: OrderMutationRequest) -> str:
    if request_dto.items is not None:
        return "replace" if request_dto.items else "clear"
    if request_dto.remove_item_ids is not None:
        return "remove"
    return "mark_delivered"
