from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Callable, Iterable

from slotdine.domain.common.ids import CartLineId, LedgerName, OrderedItemId, TicketId
from slotdine.domain.common.money import Money
from slotdine.domain.menu.entities import VegType
from slotdine.domain.order.cart import CartLine


class OrderStatus(str, Enum):
    DRAFT = "draft"
    PLACED = "placed"
    RECEIVED = "received"
    READY = "ready"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.READY, OrderStatus.DELIVERED)


class OrderTransitionError(Exception):
    pass


class AlreadyDeliveredError(OrderTransitionError):
    def __init__(self, message: str = "order has already been delivered") -> None:
        super().__init__(message)


class EmptyCartError(Exception):
    def __init__(self, message: str = "No items added for this service yet.") -> None:
        super().__init__(message)


class OrderedItemNotFoundError(Exception):
    pass


@dataclass(frozen=True)
class OrderedItem:
    ordered_item_id: OrderedItemId
    line_id: CartLineId
    name: str
    unit_price: Money | None
    quantity: int
    is_decoration_charge: bool = False
    veg_type: VegType = "veg"
    variant_key: str | None = None
    category: str | None = None

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError("quantity must be >= 1")

    @property
    def line_total(self) -> Money:
        if self.unit_price is None:
            return Money.zero()
        return self.unit_price.times(self.quantity)

    def to_cart_line(self) -> CartLine:
        return CartLine(
            line_id=self.line_id,
            name=self.name,
            unit_price=self.unit_price,
            quantity=self.quantity,
            is_decoration_charge=self.is_decoration_charge,
            veg_type=self.veg_type,
            variant_key=self.variant_key,
            category=self.category,
        )


def ordered_item_from_line(line: CartLine, ordered_item_id: OrderedItemId) -> OrderedItem:
    return OrderedItem(
        ordered_item_id=ordered_item_id,
        line_id=line.line_id,
        name=line.name,
        unit_price=line.unit_price,
        quantity=line.quantity,
        is_decoration_charge=line.is_decoration_charge,
        veg_type=line.veg_type,
        variant_key=line.variant_key,
        category=line.category,
    )


@dataclass(frozen=True)
class OrderRecord:
    ticket_id: TicketId
    ledger: LedgerName
    status: OrderStatus = OrderStatus.DRAFT
    items: tuple[OrderedItem, ...] = field(default_factory=tuple)
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        line_ids = [item.line_id for item in self.items]
        if len(line_ids) != len(set(line_ids)):
            raise ValueError("ledger items must have distinct line ids")

    @property
    def subtotal(self) -> Money:
        total = Money.zero()
        for item in self.items:
            total = total + item.line_total
        return total

    def total(self, decoration_fee: Money | None = None) -> Money:
        subtotal = self.subtotal
        if decoration_fee is not None and any(item.is_decoration_charge for item in self.items):
            return subtotal + decoration_fee
        return subtotal

    def find(self, ordered_item_id: str) -> OrderedItem | None:
        for item in self.items:
            if item.ordered_item_id == ordered_item_id:
                return item
        return None

    def ensure_guest_editable(self) -> None:
        if self.status.is_terminal:
            raise AlreadyDeliveredError(
                f"order for ticket {self.ticket_id} is already {self.status.value}"
            )

    def replace_items(
        self,
        lines: Iterable[CartLine],
        new_id: Callable[[], OrderedItemId],
        now: datetime | None = None,
    ) -> OrderRecord:
        """Replace the full item list, keeping ordered ids of surviving lines."""
        self.ensure_guest_editable()
        previous = {item.line_id: item.ordered_item_id for item in self.items}
        items = tuple(
            ordered_item_from_line(line, previous.get(line.line_id) or new_id())
            for line in _merge_lines(lines)
        )
        if not items:
            return replace(self, items=(), status=OrderStatus.CANCELLED, updated_at=now)
        return replace(self, items=items, status=OrderStatus.PLACED, updated_at=now)

    def place(
        self,
        lines: Iterable[CartLine],
        new_id: Callable[[], OrderedItemId],
        now: datetime | None = None,
    ) -> OrderRecord:
        additions = list(lines)
        if not additions:
            raise EmptyCartError()
        merged = [item.to_cart_line() for item in self.items] + additions
        return self.replace_items(merged, new_id=new_id, now=now)

    def cancel_all(self, now: datetime | None = None) -> OrderRecord:
        self.ensure_guest_editable()
        return replace(self, items=(), status=OrderStatus.CANCELLED, updated_at=now)

    def cancel_items(self, ordered_item_ids: Iterable[str], now: datetime | None = None) -> OrderRecord:
        self.ensure_guest_editable()
        targets = set(ordered_item_ids)
        missing = sorted(target for target in targets if self.find(target) is None)
        if missing:
            raise OrderedItemNotFoundError(
                f"ordered items not found for ticket {self.ticket_id}: {', '.join(missing)}"
            )
        remaining = tuple(item for item in self.items if item.ordered_item_id not in targets)
        status = self.status if remaining else OrderStatus.DRAFT
        return replace(self, items=remaining, status=status, updated_at=now)

    def cancel_item(self, ordered_item_id: str, now: datetime | None = None) -> OrderRecord:
        return self.cancel_items([ordered_item_id], now=now)

    def mark_received(self, now: datetime | None = None) -> OrderRecord:
        if self.status != OrderStatus.PLACED:
            raise OrderTransitionError(f"cannot mark received from status={self.status.value}")
        return replace(self, status=OrderStatus.RECEIVED, updated_at=now)

    def mark_ready(self, now: datetime | None = None) -> OrderRecord:
        if self.status not in (OrderStatus.PLACED, OrderStatus.RECEIVED):
            raise OrderTransitionError(f"cannot mark ready from status={self.status.value}")
        return replace(self, status=OrderStatus.READY, updated_at=now)

    def mark_delivered(self, now: datetime | None = None) -> OrderRecord:
        if self.status == OrderStatus.DELIVERED:
            return self
        if self.status not in (OrderStatus.PLACED, OrderStatus.RECEIVED, OrderStatus.READY):
            raise OrderTransitionError(f"cannot mark delivered from status={self.status.value}")
        return replace(self, status=OrderStatus.DELIVERED, updated_at=now)


def _merge_lines(lines: Iterable[CartLine]) -> list[CartLine]:
    merged: dict[str, CartLine] = {}
    for line in lines:
        existing = merged.get(line.line_id)
        if existing is None:
            merged[line.line_id] = line
        else:
            merged[line.line_id] = replace(existing, quantity=existing.quantity + line.quantity)
    return list(merged.values())
