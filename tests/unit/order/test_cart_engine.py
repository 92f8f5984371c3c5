from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from slotdine.domain.common.ids import CartLineId, MenuItemId
from slotdine.domain.common.money import Money
from slotdine.domain.menu.entities import HalfFullPrice, MenuItem
from slotdine.domain.menu.variants import resolve
from slotdine.domain.order.cart import Cart, CartLine, CartValidationError, custom_line

PIZZA = MenuItem(
    item_id=MenuItemId("pizza"),
    name="Pizza",
    pricing=HalfFullPrice(half=Money(12000), full=Money(20000)),
)


def _line(line_id: str, rupees: int | None, quantity: int = 1, decoration: bool = False) -> CartLine:
    return CartLine(
        line_id=CartLineId(line_id),
        name=line_id.title(),
        unit_price=Money.from_major(rupees) if rupees is not None else None,
        quantity=quantity,
        is_decoration_charge=decoration,
    )


def test_adding_same_line_merges_quantities() -> None:
    cart = Cart().add(_line("popcorn", 220, 2)).add(_line("popcorn", 220, 3))

    assert len(cart) == 1
    assert cart.get("popcorn").quantity == 5


def test_merge_keeps_existing_price_and_metadata() -> None:
    cart = Cart().add(_line("popcorn", 220)).add(_line("popcorn", 999, 1, decoration=True))

    line = cart.get("popcorn")
    assert line.unit_price == Money(22000)
    assert line.is_decoration_charge is False
    assert line.quantity == 2


def test_variants_of_one_item_are_separate_lines() -> None:
    cart = Cart().add(resolve(PIZZA, "half")).add(resolve(PIZZA, "full"))

    assert [line.line_id for line in cart.lines] == ["pizza-half", "pizza-full"]
    assert cart.total() == Money(32000)


def test_quantity_changes_clamp_at_one() -> None:
    cart = Cart().add(_line("nachos", 260, 2))

    assert cart.set_quantity("nachos", -10).get("nachos").quantity == 1
    assert cart.set_quantity("nachos", 3).get("nachos").quantity == 5
    assert cart.set_quantity("nachos", 0) is cart
    assert cart.set_quantity("missing", 1) == cart


def test_cart_operations_return_new_values() -> None:
    original = Cart().add(_line("nachos", 260))

    updated = original.add(_line("coffee", 180))

    assert len(original) == 1
    assert len(updated) == 2
    assert updated.remove("nachos").get("nachos") is None
    assert updated.clear().is_empty


def test_total_treats_missing_prices_as_zero() -> None:
    cart = Cart().add(_line("popcorn", 220)).add(_line("soft-drink", 160, 2)).add(_line("water", None))

    assert cart.total() == Money(54000)


def test_decoration_fee_added_once() -> None:
    fee = Money.from_major(500)
    cart = (
        Cart()
        .add(_line("balloons", 300, decoration=True))
        .add(_line("candles", 100, 2, decoration=True))
        .add(_line("popcorn", 220))
    )

    assert cart.grand_total(fee) == Money(72000 + 50000)
    assert Cart().add(_line("popcorn", 220)).grand_total(fee) == Money(22000)


def test_custom_line_is_validated_locally() -> None:
    line = custom_line(" Masala  Chai ", "45.5", 2, line_suffix="1")

    assert line.line_id == "masala-chai-1"
    assert line.name == "Masala  Chai"
    assert line.unit_price == Money(4550)
    assert line.quantity == 2

    with pytest.raises(CartValidationError, match="item name"):
        custom_line("  ", 10, 1, line_suffix="2")
    with pytest.raises(CartValidationError, match="valid price"):
        custom_line("Tea", -1, 1, line_suffix="2")
    with pytest.raises(CartValidationError, match="valid price"):
        custom_line("Tea", "free", 1, line_suffix="2")
    with pytest.raises(CartValidationError, match="valid price"):
        custom_line("Tip", "inf", 1, line_suffix="2")
    with pytest.raises(CartValidationError, match="valid price"):
        Cart().add_custom("Tip", 1e400)
    with pytest.raises(CartValidationError, match="at least 1"):
        custom_line("Tea", 10, 0, line_suffix="2")


def test_add_custom_appends_a_validated_line() -> None:
    cart = Cart().add_custom("Masala Chai", 45, 2, line_suffix="7")

    assert [line.line_id for line in cart.lines] == ["masala-chai-7"]
    assert cart.total() == Money(9000)
    with pytest.raises(CartValidationError):
        cart.add_custom("", 10)
