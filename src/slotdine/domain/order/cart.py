from __future__ import annotations

import math
import re
from dataclasses import dataclass, field, replace

from slotdine.domain.common.ids import CartLineId
from slotdine.domain.common.money import Money
from slotdine.domain.menu.entities import VegType


class CartValidationError(Exception):
    pass


@dataclass(frozen=True)
class CartLine:
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
        if not str(self.line_id):
            raise ValueError("line_id must be non-empty")

    @property
    def line_total(self) -> Money:
        if self.unit_price is None:
            return Money.zero()
        return self.unit_price.times(self.quantity)


@dataclass(frozen=True)
class Cart:
    lines: tuple[CartLine, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def get(self, line_id: str) -> CartLine | None:
        for line in self.lines:
            if line.line_id == line_id:
                return line
        return None

    def add(self, line: CartLine) -> Cart:
        existing = self.get(line.line_id)
        if existing is None:
            return Cart(lines=self.lines + (line,))
        merged = replace(existing, quantity=existing.quantity + line.quantity)
        return Cart(lines=tuple(merged if item is existing else item for item in self.lines))

    def add_custom(self, name: str, price: object, quantity: object = 1, line_suffix: str = "1") -> Cart:
        return self.add(custom_line(name, price, quantity, line_suffix=line_suffix))

    def set_quantity(self, line_id: str, delta: int) -> Cart:
        if not delta:
            return self
        return Cart(
            lines=tuple(
                replace(line, quantity=max(line.quantity + delta, 1))
                if line.line_id == line_id
                else line
                for line in self.lines
            )
        )

    def remove(self, line_id: str) -> Cart:
        return Cart(lines=tuple(line for line in self.lines if line.line_id != line_id))

    def clear(self) -> Cart:
        return Cart()

    def total(self) -> Money:
        total = Money.zero()
        for line in self.lines:
            total = total + line.line_total
        return total

    def has_decoration_charge(self) -> bool:
        return any(line.is_decoration_charge for line in self.lines)

    def grand_total(self, decoration_fee: Money | None = None) -> Money:
        total = self.total()
        if decoration_fee is not None and self.has_decoration_charge():
            total = total + decoration_fee
        return total


def custom_line(name: str, price: object, quantity: object, line_suffix: str) -> CartLine:
    """Validate a manually entered line before it reaches the cart."""
    cleaned = (name or "").strip()
    if not cleaned:
        raise CartValidationError("Please enter item name.")
    try:
        amount = float(price)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise CartValidationError("Please enter a valid price.") from exc
    if not math.isfinite(amount) or amount < 0:
        raise CartValidationError("Please enter a valid price.")
    try:
        count = int(quantity)  # type: ignore[call-overload]
    except (TypeError, ValueError) as exc:
        raise CartValidationError("Quantity should be at least 1.") from exc
    if count < 1:
        raise CartValidationError("Quantity should be at least 1.")

    slug = re.sub(r"\s+", "-", cleaned.lower())
    return CartLine(
        line_id=CartLineId(f"{slug}-{line_suffix}"),
        name=cleaned,
        unit_price=Money.from_major(amount),
        quantity=count,
    )
