from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Union

from slotdine.domain.common.ids import MenuItemId
from slotdine.domain.common.money import Money

VegType = Literal["veg", "non-veg"]

UNCATEGORIZED_KEY = "__uncategorized__"
UNCATEGORIZED_LABEL = "Other Items"


@dataclass(frozen=True)
class SinglePrice:
    price: Money | None = None


@dataclass(frozen=True)
class HalfFullPrice:
    half: Money | None = None
    full: Money | None = None


@dataclass(frozen=True)
class ThreeSizePrice:
    small: Money | None = None
    medium: Money | None = None
    large: Money | None = None


Pricing = Union[SinglePrice, HalfFullPrice, ThreeSizePrice]


@dataclass(frozen=True)
class MenuItem:
    item_id: MenuItemId
    name: str
    pricing: Pricing = field(default_factory=SinglePrice)
    category: str | None = None
    veg_type: VegType = "veg"
    image_url: str | None = None
    is_decoration: bool = False

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("name must be non-empty")

    @property
    def base_price(self) -> Money | None:
        if isinstance(self.pricing, SinglePrice):
            return self.pricing.price
        return None


@dataclass(frozen=True)
class Variant:
    key: str
    label: str
    price: Money


@dataclass(frozen=True)
class MenuCategoryGroup:
    key: str
    label: str
    items: list[MenuItem] = field(default_factory=list)


def resolve_veg_type(value: object) -> VegType:
    return "non-veg" if value == "non-veg" else "veg"
