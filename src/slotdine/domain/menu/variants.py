from __future__ import annotations

from slotdine.domain.common.ids import CartLineId
from slotdine.domain.common.money import Money
from slotdine.domain.menu.entities import (
    HalfFullPrice,
    MenuItem,
    SinglePrice,
    ThreeSizePrice,
    Variant,
)
from slotdine.domain.order.cart import CartLine

_VARIANT_NAMES = {
    "half": "Half",
    "full": "Full",
    "small": "Small",
    "medium": "Medium",
    "large": "Large",
}


class UnknownVariantError(Exception):
    pass


def variants_of(item: MenuItem) -> list[Variant]:
    pricing = item.pricing
    candidates: list[tuple[str, str, Money | None]]
    if isinstance(pricing, HalfFullPrice):
        candidates = [("half", "Half", pricing.half), ("full", "Full", pricing.full)]
    elif isinstance(pricing, ThreeSizePrice):
        candidates = [
            ("small", "Small", pricing.small),
            ("medium", "Medium", pricing.medium),
            ("large", "Large", pricing.large),
        ]
    elif isinstance(pricing, SinglePrice):
        candidates = [("single", "Price", pricing.price)]
    else:
        candidates = []

    return [
        Variant(key=key, label=f"{label} {price.format()}", price=price)
        for key, label, price in candidates
        if price is not None and price.amount_minor > 0
    ]


def coerce_quantity(quantity: object) -> int:
    if isinstance(quantity, bool):
        return 1
    if isinstance(quantity, float):
        if not quantity.is_integer():
            return 1
        quantity = int(quantity)
    try:
        value = int(quantity)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        return 1
    return value if value >= 1 else 1


def resolve(item: MenuItem, chosen_key: str | None, quantity: object = 1) -> CartLine:
    """Turn a menu item plus a chosen variant into a cart line.

    Items without any priced option bypass selection and become a single line
    carrying the raw price, which may be missing.
    """
    count = coerce_quantity(quantity)
    options = variants_of(item)

    if not options:
        return _line(item, CartLineId(str(item.item_id)), item.name, item.base_price, count, None)

    key = chosen_key or options[0].key
    chosen = next((option for option in options if option.key == key), None)
    if chosen is None:
        raise UnknownVariantError(f"menu item {item.item_id} has no variant {key!r}")

    if len(options) == 1:
        return _line(item, CartLineId(str(item.item_id)), item.name, chosen.price, count, chosen.key)

    suffix = _VARIANT_NAMES.get(chosen.key)
    name = f"{item.name} ({suffix})" if suffix else item.name
    return _line(item, CartLineId(f"{item.item_id}-{chosen.key}"), name, chosen.price, count, chosen.key)


def _line(
    item: MenuItem,
    line_id: CartLineId,
    name: str,
    price: Money | None,
    quantity: int,
    variant_key: str | None,
) -> CartLine:
    return CartLine(
        line_id=line_id,
        name=name,
        unit_price=price,
        quantity=quantity,
        is_decoration_charge=item.is_decoration,
        veg_type=item.veg_type,
        variant_key=variant_key,
        category=item.category,
    )
