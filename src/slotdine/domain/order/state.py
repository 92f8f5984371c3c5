"""Client-side order state and the pure reducer that advances it.

Every guest action is expressed as an intent. ``apply`` validates the intent
against the current state and returns the next state without touching the
network, so the same function produces both the optimistic guess and the
local-only cart edits.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field, replace
from typing import Callable, Union

from slotdine.domain.common.ids import LedgerName, OrderedItemId, TicketId
from slotdine.domain.order.cart import Cart, CartLine
from slotdine.domain.order.entities import OrderRecord, OrderStatus

PROVISIONAL_ID_PREFIX = "pending-"


@dataclass(frozen=True)
class GuestOrderState:
    cart: Cart
    order: OrderRecord

    @classmethod
    def empty(cls, ticket_id: TicketId, ledger: LedgerName) -> GuestOrderState:
        return cls(cart=Cart(), order=OrderRecord(ticket_id=ticket_id, ledger=ledger))

    @property
    def order_placed(self) -> bool:
        return bool(self.order.items)


@dataclass(frozen=True)
class AddLine:
    line: CartLine


@dataclass(frozen=True)
class ChangeQuantity:
    line_id: str
    delta: int


@dataclass(frozen=True)
class RemoveLine:
    line_id: str


@dataclass(frozen=True)
class ClearCart:
    pass


@dataclass(frozen=True)
class PlaceOrder:
    pass


@dataclass(frozen=True)
class CancelAll:
    pass


@dataclass(frozen=True)
class CancelItem:
    ordered_item_id: str


@dataclass(frozen=True)
class MarkDelivered:
    pass


@dataclass(frozen=True)
class AdoptOrder:
    order: OrderRecord
    clear_cart: bool = field(default=False)


Intent = Union[
    AddLine,
    ChangeQuantity,
    RemoveLine,
    ClearCart,
    PlaceOrder,
    CancelAll,
    CancelItem,
    MarkDelivered,
    AdoptOrder,
]


def apply(state: GuestOrderState, intent: Intent) -> GuestOrderState:
    if isinstance(intent, AddLine):
        return replace(state, cart=state.cart.add(intent.line))
    if isinstance(intent, ChangeQuantity):
        return replace(state, cart=state.cart.set_quantity(intent.line_id, intent.delta))
    if isinstance(intent, RemoveLine):
        return replace(state, cart=state.cart.remove(intent.line_id))
    if isinstance(intent, ClearCart):
        return replace(state, cart=state.cart.clear())
    if isinstance(intent, PlaceOrder):
        order = state.order.place(state.cart.lines, new_id=_provisional_ids())
        return GuestOrderState(cart=state.cart.clear(), order=order)
    if isinstance(intent, CancelAll):
        return replace(state, order=state.order.cancel_all())
    if isinstance(intent, CancelItem):
        return replace(state, order=state.order.cancel_item(intent.ordered_item_id))
    if isinstance(intent, MarkDelivered):
        return replace(state, order=state.order.mark_delivered())
    if isinstance(intent, AdoptOrder):
        cart = state.cart.clear() if intent.clear_cart else state.cart
        return GuestOrderState(cart=cart, order=intent.order)
    raise TypeError(f"unsupported intent: {type(intent).__name__}")


def is_provisional(ordered_item_id: str) -> bool:
    return ordered_item_id.startswith(PROVISIONAL_ID_PREFIX)


def _provisional_ids() -> Callable[[], OrderedItemId]:
    counter = itertools.count(1)
    return lambda: OrderedItemId(f"{PROVISIONAL_ID_PREFIX}{next(counter)}")


def status_label(status: OrderStatus) -> str:
    if status.is_terminal:
        return "Delivered"
    if status == OrderStatus.RECEIVED:
        return "Order Received"
    if status == OrderStatus.PLACED:
        return "Pending"
    return status.value.capitalize()
