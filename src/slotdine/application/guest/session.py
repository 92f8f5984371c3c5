"""Guest-facing ordering session.

The session mirrors one reservation's ledger order and owns the draft cart.
Cart edits are local. Order mutations go through the ``SyncReconciler`` so the
view changes immediately and is restored exactly when the boundary rejects
the change or the call fails.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timedelta, tzinfo
from functools import partial
from typing import Awaitable, Callable

from slotdine.application.dto.requests import OrderMutationRequest
from slotdine.application.dto.responses import OrderMutationResponse
from slotdine.application.mappers.order_mapper import to_line_payload, to_order_record
from slotdine.application.mappers.reservation_mapper import to_reservation
from slotdine.application.ports.gateway import OrderGateway
from slotdine.application.sync.reconciler import MutationInFlightError, SyncReconciler
from slotdine.domain.booking.entities import Reservation, normalize_ticket_id
from slotdine.domain.booking.window import (
    DEFAULT_ACCESS_BUFFER,
    OrderingWindowStatus,
    TooEarly,
    TooLate,
    ordering_window_status,
)
from slotdine.domain.common.ids import LedgerName
from slotdine.domain.common.money import Money
from slotdine.domain.menu.catalog import CatalogSource, fallback_catalog, load_catalog
from slotdine.domain.menu.entities import MenuItem
from slotdine.domain.menu.variants import resolve
from slotdine.domain.order.cart import CartLine, custom_line
from slotdine.domain.order.entities import EmptyCartError, OrderRecord
from slotdine.domain.order.ledgers import FOOD_LEDGER
from slotdine.domain.order.state import (
    AddLine,
    AdoptOrder,
    CancelAll,
    CancelItem,
    ChangeQuantity,
    GuestOrderState,
    Intent,
    MarkDelivered,
    PlaceOrder,
    RemoveLine,
    apply,
)

logger = logging.getLogger(__name__)


class OrderingWindowClosedError(Exception):
    pass


class WindowTooEarlyError(OrderingWindowClosedError):
    def __init__(self, access_opens_at: datetime, access_buffer: timedelta) -> None:
        minutes = int(access_buffer.total_seconds() // 60)
        super().__init__(
            f"Sorry! Food ordering opens {minutes} minutes before your slot "
            f"at {access_opens_at:%I:%M %p}."
        )
        self.access_opens_at = access_opens_at


class WindowTooLateError(OrderingWindowClosedError):
    def __init__(self, closed_at: datetime) -> None:
        super().__init__(f"Sorry! This booking's ordering window closed at {closed_at:%I:%M %p}.")
        self.closed_at = closed_at


class SessionNotOpenError(Exception):
    def __init__(self) -> None:
        super().__init__("No booking loaded. Enter ticket number first.")


class GuestOrderingSession:
    def __init__(
        self,
        gateway: OrderGateway,
        *,
        ledger: LedgerName = FOOD_LEDGER,
        clock: Callable[[], datetime] | None = None,
        tz: tzinfo | None = None,
        access_buffer: timedelta = DEFAULT_ACCESS_BUFFER,
        decoration_fee: Money | None = None,
    ) -> None:
        self._gateway = gateway
        self._ledger = ledger
        self._clock = clock or partial(datetime.now, tz)
        self._access_buffer = access_buffer
        self._decoration_fee = decoration_fee
        self._reconciler: SyncReconciler[GuestOrderState] = SyncReconciler()
        self._reservation: Reservation | None = None
        self._state: GuestOrderState | None = None
        self._catalog: CatalogSource | None = None
        self._custom_lines = 0

    @property
    def reservation(self) -> Reservation | None:
        return self._reservation

    @property
    def catalog(self) -> CatalogSource | None:
        return self._catalog

    @property
    def state(self) -> GuestOrderState:
        if self._state is None:
            raise SessionNotOpenError()
        return self._state

    @property
    def order(self) -> OrderRecord:
        return self.state.order

    @property
    def record_key(self) -> str:
        reservation = self._require_reservation()
        return f"{reservation.ticket_id}:{self._ledger}"

    def window_status(self) -> OrderingWindowStatus:
        reservation = self._require_reservation()
        return ordering_window_status(
            reservation.date,
            reservation.time_range,
            now=self._clock(),
            access_buffer=self._access_buffer,
        )

    async def open(self, ticket_id: str) -> Reservation:
        normalized = normalize_ticket_id(ticket_id)
        if not normalized:
            raise ValueError("Please enter your ticket number.")

        lookup = await self._gateway.fetch_reservation(normalized)
        reservation = to_reservation(lookup.reservation)

        status = ordering_window_status(
            reservation.date,
            reservation.time_range,
            now=self._clock(),
            access_buffer=self._access_buffer,
        )
        self._raise_if_closed(status)

        state = GuestOrderState.empty(reservation.ticket_id, self._ledger)
        existing = lookup.existingOrders.get(str(self._ledger))
        if existing is not None:
            state = apply(state, AdoptOrder(order=to_order_record(existing)))

        self._reservation = reservation
        self._state = state
        logger.info(
            "guest_session_opened",
            extra={"ticket_id": str(reservation.ticket_id), "ledger": str(self._ledger)},
        )
        return reservation

    async def refresh(self) -> OrderRecord:
        reservation = self._require_reservation()
        lookup = await self._gateway.fetch_reservation(reservation.ticket_id)
        existing = lookup.existingOrders.get(str(self._ledger))
        order = (
            to_order_record(existing)
            if existing is not None
            else OrderRecord(ticket_id=reservation.ticket_id, ledger=self._ledger)
        )
        self._state = apply(self.state, AdoptOrder(order=order))
        return order

    async def load_menu(self) -> CatalogSource:
        try:
            payload = await self._gateway.fetch_menu()
        except Exception as exc:
            logger.warning("menu_feed_fallback", extra={"reason": type(exc).__name__})
            self._catalog = fallback_catalog(str(exc) or type(exc).__name__)
            return self._catalog
        self._catalog = load_catalog(lambda: payload)
        return self._catalog

    def add_item(
        self,
        item: MenuItem,
        variant_key: str | None = None,
        quantity: object = 1,
    ) -> CartLine:
        line = resolve(item, variant_key, quantity)
        self._apply_local(AddLine(line=line))
        return line

    def add_custom_item(self, name: str, price: object, quantity: object = 1) -> CartLine:
        self._custom_lines += 1
        line = custom_line(name, price, quantity, line_suffix=str(self._custom_lines))
        self._apply_local(AddLine(line=line))
        return line

    def change_quantity(self, line_id: str, delta: int) -> None:
        self._apply_local(ChangeQuantity(line_id=line_id, delta=delta))

    def remove_line(self, line_id: str) -> None:
        self._apply_local(RemoveLine(line_id=line_id))

    def cart_total(self) -> Money:
        return self.state.cart.total()

    def cart_grand_total(self) -> Money:
        return self.state.cart.grand_total(self._decoration_fee)

    async def place_order(self) -> OrderRecord:
        self._require_reservation()
        if self.state.cart.is_empty:
            raise EmptyCartError()
        self._raise_if_closed(self.window_status())

        def _persist(optimistic: GuestOrderState) -> Awaitable[OrderMutationResponse]:
            return self._submit(
                OrderMutationRequest(
                    items=[to_line_payload(item.to_cart_line()) for item in optimistic.order.items]
                )
            )

        await self._mutate(PlaceOrder(), _persist, "Failed to save food items")
        return self.order

    async def cancel_all(self) -> OrderRecord:
        self._require_reservation()

        def _persist(_: GuestOrderState) -> Awaitable[OrderMutationResponse]:
            return self._submit(OrderMutationRequest(items=[]))

        await self._mutate(CancelAll(), _persist, "Failed to cancel order")
        return self.order

    async def cancel_item(self, ordered_item_id: str) -> OrderRecord:
        self._require_reservation()

        def _persist(_: GuestOrderState) -> Awaitable[OrderMutationResponse]:
            return self._submit(OrderMutationRequest(remove_item_ids=[ordered_item_id]))

        await self._mutate(CancelItem(ordered_item_id=ordered_item_id), _persist, "Failed to remove item")
        return self.order

    async def mark_delivered(self) -> OrderRecord:
        self._require_reservation()

        def _persist(_: GuestOrderState) -> Awaitable[OrderMutationResponse]:
            return self._submit(OrderMutationRequest(mark_delivered=True))

        await self._mutate(MarkDelivered(), _persist, "Failed to mark order delivered")
        return self.order

    async def _mutate(
        self,
        intent: Intent,
        persist: Callable[[GuestOrderState], Awaitable[OrderMutationResponse]],
        failure_message: str,
    ) -> OrderMutationResponse:
        return await self._reconciler.mutate(
            self.record_key,
            read=lambda: self.state,
            write=self._write,
            apply=lambda current: apply(current, intent),
            persist=persist,
            adopt=self._adopt,
            failure_message=failure_message,
        )

    async def _submit(self, request: OrderMutationRequest) -> OrderMutationResponse:
        reservation = self._require_reservation()
        return await self._gateway.submit_order_mutation(
            str(reservation.ticket_id),
            str(self._ledger),
            request,
        )

    def _adopt(self, current: GuestOrderState, outcome: OrderMutationResponse) -> GuestOrderState:
        if outcome.order is None:
            raise ValueError("mutation response carries no order")
        return replace(current, order=to_order_record(outcome.order))

    def _write(self, state: GuestOrderState) -> None:
        self._state = state

    def _apply_local(self, intent: Intent) -> None:
        if self._reservation is not None and self._reconciler.is_in_flight(self.record_key):
            raise MutationInFlightError("the order is being updated, try again in a moment")
        self._state = apply(self.state, intent)

    def _require_reservation(self) -> Reservation:
        if self._reservation is None:
            raise SessionNotOpenError()
        return self._reservation

    def _raise_if_closed(self, status: OrderingWindowStatus) -> None:
        if isinstance(status, TooEarly):
            raise WindowTooEarlyError(status.access_opens_at, self._access_buffer)
        if isinstance(status, TooLate):
            raise WindowTooLateError(status.closed_at)
