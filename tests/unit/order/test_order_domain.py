from __future__ import annotations

import itertools
import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from slotdine.domain.common.ids import CartLineId, LedgerName, OrderedItemId, TicketId
from slotdine.domain.common.money import Money
from slotdine.domain.order.cart import CartLine
from slotdine.domain.order.entities import (
    AlreadyDeliveredError,
    EmptyCartError,
    OrderedItemNotFoundError,
    OrderRecord,
    OrderStatus,
    OrderTransitionError,
)

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def _ids():
    counter = itertools.count(1)
    return lambda: OrderedItemId(f"oit_{next(counter)}")


def _line(line_id: str, rupees: int, quantity: int = 1, decoration: bool = False) -> CartLine:
    return CartLine(
        line_id=CartLineId(line_id),
        name=line_id.title(),
        unit_price=Money.from_major(rupees),
        quantity=quantity,
        is_decoration_charge=decoration,
    )


def _record() -> OrderRecord:
    return OrderRecord(ticket_id=TicketId("SLT-1001"), ledger=LedgerName("food"))


def test_place_sets_placed_and_assigns_ids() -> None:
    placed = _record().place([_line("popcorn", 220), _line("soft-drink", 160, 2)], new_id=_ids(), now=NOW)

    assert placed.status == OrderStatus.PLACED
    assert [item.ordered_item_id for item in placed.items] == ["oit_1", "oit_2"]
    assert placed.subtotal == Money(54000)
    assert placed.updated_at == NOW


def test_place_merges_into_existing_items_and_keeps_ids() -> None:
    new_id = _ids()
    first = _record().place([_line("popcorn", 220)], new_id=new_id)

    second = first.place([_line("popcorn", 220, 2), _line("nachos", 260)], new_id=new_id)

    assert [(item.line_id, item.quantity, item.ordered_item_id) for item in second.items] == [
        ("popcorn", 3, "oit_1"),
        ("nachos", 1, "oit_2"),
    ]


def test_place_requires_lines() -> None:
    with pytest.raises(EmptyCartError, match="No items added"):
        _record().place([], new_id=_ids())


def test_replacing_with_empty_list_cancels() -> None:
    placed = _record().place([_line("popcorn", 220)], new_id=_ids())

    cleared = placed.replace_items([], new_id=_ids())

    assert cleared.status == OrderStatus.CANCELLED
    assert cleared.items == ()


def test_cancel_item_keeps_status_until_last_item() -> None:
    placed = _record().place([_line("popcorn", 220), _line("nachos", 260)], new_id=_ids())

    one_left = placed.cancel_item("oit_1")
    none_left = one_left.cancel_item("oit_2")

    assert one_left.status == OrderStatus.PLACED
    assert [item.ordered_item_id for item in one_left.items] == ["oit_2"]
    assert none_left.status == OrderStatus.DRAFT
    assert none_left.items == ()


def test_cancel_unknown_item_is_rejected() -> None:
    placed = _record().place([_line("popcorn", 220)], new_id=_ids())

    with pytest.raises(OrderedItemNotFoundError):
        placed.cancel_item("oit_99")


def test_cancel_all_clears_items() -> None:
    placed = _record().place([_line("popcorn", 220)], new_id=_ids())

    cancelled = placed.cancel_all(now=NOW)

    assert cancelled.status == OrderStatus.CANCELLED
    assert cancelled.items == ()


@pytest.mark.parametrize("terminal", [OrderStatus.READY, OrderStatus.DELIVERED])
def test_terminal_orders_reject_guest_changes(terminal: OrderStatus) -> None:
    placed = _record().place([_line("popcorn", 220)], new_id=_ids())
    finished = OrderRecord(
        ticket_id=placed.ticket_id,
        ledger=placed.ledger,
        status=terminal,
        items=placed.items,
    )

    with pytest.raises(AlreadyDeliveredError):
        finished.cancel_all()
    with pytest.raises(AlreadyDeliveredError):
        finished.cancel_item("oit_1")
    with pytest.raises(AlreadyDeliveredError):
        finished.place([_line("nachos", 260)], new_id=_ids())


def test_staff_transitions() -> None:
    placed = _record().place([_line("popcorn", 220)], new_id=_ids())

    received = placed.mark_received()
    ready = received.mark_ready()
    delivered = ready.mark_delivered()

    assert received.status == OrderStatus.RECEIVED
    assert ready.status == OrderStatus.READY
    assert delivered.status == OrderStatus.DELIVERED
    assert delivered.mark_delivered() is delivered

    with pytest.raises(OrderTransitionError):
        _record().mark_ready()
    with pytest.raises(OrderTransitionError):
        ready.mark_received()


def test_total_adds_decoration_fee_once() -> None:
    fee = Money.from_major(500)
    record = OrderRecord(ticket_id=TicketId("SLT-1001"), ledger=LedgerName("decoration")).place(
        [_line("balloons", 300, decoration=True), _line("candles", 100, decoration=True)],
        new_id=_ids(),
    )

    assert record.total(fee) == Money(90000)
    assert record.total() == Money(40000)


def test_line_ids_must_be_distinct() -> None:
    placed = _record().place([_line("popcorn", 220)], new_id=_ids())

    with pytest.raises(ValueError):
        OrderRecord(
            ticket_id=placed.ticket_id,
            ledger=placed.ledger,
            items=placed.items + placed.items,
        )
