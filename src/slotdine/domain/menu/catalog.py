"""Normalization of the external catalog feed into uniform menu items."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping, Union

from slotdine.domain.common.ids import MenuItemId
from slotdine.domain.common.money import Money
from slotdine.domain.menu.entities import (
    UNCATEGORIZED_KEY,
    UNCATEGORIZED_LABEL,
    HalfFullPrice,
    MenuCategoryGroup,
    MenuItem,
    Pricing,
    SinglePrice,
    ThreeSizePrice,
    resolve_veg_type,
)

DEFAULT_ITEM_NAME = "Food Item"


class MalformedCatalogError(Exception):
    pass


@dataclass(frozen=True)
class LiveCatalog:
    items: list[MenuItem] = field(default_factory=list)

    @property
    def is_fallback(self) -> bool:
        return False


@dataclass(frozen=True)
class FallbackCatalog:
    items: list[MenuItem]
    reason: str

    @property
    def is_fallback(self) -> bool:
        return True


CatalogSource = Union[LiveCatalog, FallbackCatalog]


def _sample(item_id: str, name: str, rupees: int) -> MenuItem:
    return MenuItem(
        item_id=MenuItemId(item_id),
        name=name,
        pricing=SinglePrice(price=Money.from_major(rupees)),
        veg_type="veg",
    )


SAMPLE_MENU: tuple[MenuItem, ...] = (
    _sample("classic-popcorn", "Classic Popcorn Bucket", 220),
    _sample("cheese-nachos", "Cheesy Nachos", 260),
    _sample("veg-burger", "Signature Veg Burger", 280),
    _sample("paneer-roll", "Paneer Roll", 240),
    _sample("cold-coffee", "Cold Coffee", 180),
    _sample("soft-drink", "Soft Drink (500ml)", 160),
)


def normalize(raw_items: Iterable[Any]) -> list[MenuItem]:
    items: list[MenuItem] = []
    for index, raw in enumerate(raw_items):
        if not isinstance(raw, Mapping):
            continue
        items.append(_normalize_item(raw, index))
    return items


def _normalize_item(raw: Mapping[str, Any], index: int) -> MenuItem:
    item_id = _first_text(raw, "id", "itemId", "_id") or f"food-{index}"
    name = _first_text(raw, "name", "title") or DEFAULT_ITEM_NAME
    category = _first_text(raw, "categoryName", "category") or None
    return MenuItem(
        item_id=MenuItemId(item_id),
        name=name,
        pricing=_pricing(raw),
        category=category,
        veg_type=resolve_veg_type(raw.get("vegType")),
        image_url=_first_text(raw, "imageUrl", "image", "photoUrl") or None,
        is_decoration=bool(raw.get("isDecoration")),
    )


def _pricing(raw: Mapping[str, Any]) -> Pricing:
    mode = str(raw.get("pricingMode") or "single").strip().lower()
    if mode == "half-full":
        return HalfFullPrice(half=_price(raw.get("halfPrice")), full=_price(raw.get("fullPrice")))
    if mode == "three-size":
        return ThreeSizePrice(
            small=_price(raw.get("smallPrice")),
            medium=_price(raw.get("mediumPrice")),
            large=_price(raw.get("largePrice")),
        )
    return SinglePrice(price=_price(raw.get("price")))


def _price(value: Any) -> Money | None:
    if isinstance(value, bool) or value is None:
        return None
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(amount) or amount < 0:
        return None
    return Money.from_major(amount)


def _first_text(raw: Mapping[str, Any], *keys: str) -> str:
    for key in keys:
        value = raw.get(key)
        if value is None:
            continue
        text = str(value).strip()
        if text:
            return text
    return ""


def group_by_category(items: Iterable[MenuItem]) -> list[MenuCategoryGroup]:
    groups: dict[str, MenuCategoryGroup] = {}
    for item in items:
        trimmed = (item.category or "").strip()
        key = trimmed or UNCATEGORIZED_KEY
        label = trimmed or UNCATEGORIZED_LABEL
        if key not in groups:
            groups[key] = MenuCategoryGroup(key=key, label=label, items=[])
        groups[key].items.append(item)
    return list(groups.values())


def select_service_items(services: Iterable[Any]) -> list[Any]:
    """Pick the raw item list of the food service out of a services feed."""
    candidates = [service for service in services if isinstance(service, Mapping)]
    if not candidates:
        return []

    def _named(fragment: str) -> Mapping[str, Any] | None:
        for service in candidates:
            if fragment in str(service.get("name") or "").lower():
                return service
        return None

    service = _named("food") or _named("snack") or candidates[0]
    items = service.get("items")
    return list(items) if isinstance(items, list) else []


def parse_feed(payload: Any) -> list[MenuItem]:
    if isinstance(payload, Mapping):
        if payload.get("success") is False:
            raise MalformedCatalogError("catalog feed reported failure")
        services = payload.get("services")
        if isinstance(services, list):
            return normalize(select_service_items(services))
        items = payload.get("items")
        if isinstance(items, list):
            return normalize(items)
    if isinstance(payload, list):
        return normalize(payload)
    raise MalformedCatalogError("catalog feed has no services or items list")


def load_catalog(fetch: Callable[[], Any]) -> CatalogSource:
    try:
        items = parse_feed(fetch())
    except Exception as exc:
        return fallback_catalog(str(exc) or type(exc).__name__)
    return LiveCatalog(items=items)


def fallback_catalog(reason: str) -> FallbackCatalog:
    return FallbackCatalog(items=list(SAMPLE_MENU), reason=reason)
