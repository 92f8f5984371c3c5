from __future__ import annotations

from datetime import datetime, timezone

from slotdine.application.dto.responses import LedgerOrderResponse
from slotdine.application.mappers.order_mapper import to_ledger_order_response
from slotdine.application.metrics.order_lifecycle import record_transition
from slotdine.application.ports.repositories import LedgerRepository
from slotdine.domain.booking.entities import normalize_ticket_id
from slotdine.domain.common.money import Money
from slotdine.domain.order.entities import OrderRecord, OrderStatus, OrderTransitionError
from slotdine.domain.order.ledgers import InvalidLedgerNameError, resolve_ledger


class OrderNotFoundError(Exception):
    pass


class InvalidOrderTransitionError(Exception):
    pass


class UpdateOrderStatus:
    """Staff-side progression of a ledger order (received, ready, delivered)."""

    def __init__(
        self,
        ledger_repository: LedgerRepository,
        decoration_fee: Money | None = None,
    ) -> None:
        self._ledger_repository = ledger_repository
        self._decoration_fee = decoration_fee

    def execute(self, ticket_id: str, ledger_name: str, status: str) -> LedgerOrderResponse:
        normalized = normalize_ticket_id(ticket_id)
        try:
            ledger = resolve_ledger(ledger_name)
        except InvalidLedgerNameError as exc:
            raise OrderNotFoundError(str(exc)) from exc

        order = self._ledger_repository.get(normalized, ledger.name)
        if order is None or not order.items:
            raise OrderNotFoundError(
                f"no {ledger.name} order for ticket number {normalized}"
            )

        target = OrderStatus(status)
        if order.status == target:
            return to_ledger_order_response(order, self._decoration_fee)

        try:
            updated = _transition(order, target)
        except OrderTransitionError as exc:
            raise InvalidOrderTransitionError(str(exc)) from exc

        persisted = self._ledger_repository.save(updated)
        record_transition(from_status=order.status, to_status=persisted.status)
        return to_ledger_order_response(persisted, self._decoration_fee)


def _transition(order: OrderRecord, target: OrderStatus) -> OrderRecord:
    now = datetime.now(timezone.utc)
    if target == OrderStatus.RECEIVED:
        return order.mark_received(now=now)
    if target == OrderStatus.READY:
        return order.mark_ready(now=now)
    if target == OrderStatus.DELIVERED:
        return order.mark_delivered(now=now)
    raise OrderTransitionError(f"cannot move order to status={target.value}")
