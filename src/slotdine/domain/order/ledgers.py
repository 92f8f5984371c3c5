from __future__ import annotations

import re
from dataclasses import dataclass

from slotdine.domain.common.ids import LedgerName

FOOD_LEDGER = LedgerName("food")
DECORATION_LEDGER = LedgerName("decoration")

_SERVICE_LEDGERS: dict[str, str] = {
    "food": "food",
    "foods": "food",
    "snack": "food",
    "snacks": "food",
    "beverage": "food",
    "beverages": "food",
    "drink": "food",
    "drinks": "food",
    "decor": "decoration",
    "decoration": "decoration",
    "decorations": "decoration",
    "addon": "extras",
    "add-ons": "extras",
    "add on": "extras",
    "extra": "extras",
    "extras": "extras",
    "cake": "cakes",
    "cakes": "cakes",
    "photo": "photography",
    "photos": "photography",
    "photography": "photography",
}


class InvalidLedgerNameError(Exception):
    pass


@dataclass(frozen=True)
class LedgerSpec:
    name: LedgerName
    is_decoration: bool


def resolve_ledger(service_name: str | None) -> LedgerSpec:
    normalized = (service_name or "").strip().lower()
    if not normalized:
        raise InvalidLedgerNameError("Service name is required for order items")

    canonical = _SERVICE_LEDGERS.get(normalized)
    if canonical is None:
        for key, value in _SERVICE_LEDGERS.items():
            if key in normalized:
                canonical = value
                break

    if canonical is None:
        sanitized = re.sub(r"[^a-z0-9]+", "-", normalized).strip("-")
        if not sanitized:
            raise InvalidLedgerNameError(f"cannot derive a ledger from service {service_name!r}")
        canonical = sanitized

    return LedgerSpec(name=LedgerName(canonical), is_decoration=canonical == DECORATION_LEDGER)
