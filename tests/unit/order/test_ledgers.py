from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from slotdine.domain.order.ledgers import InvalidLedgerNameError, resolve_ledger


@pytest.mark.parametrize(
    ("service_name", "ledger"),
    [
        ("Food", "food"),
        ("Food & Beverages", "food"),
        ("Snacks", "food"),
        ("  Drinks ", "food"),
        ("Decorations", "decoration"),
        ("Add-ons", "extras"),
        ("Cakes", "cakes"),
        ("Photo Booth", "photography"),
        ("VIP Lounge!", "vip-lounge"),
    ],
)
def test_service_names_map_to_ledgers(service_name: str, ledger: str) -> None:
    assert resolve_ledger(service_name).name == ledger


def test_only_decoration_ledger_is_flagged() -> None:
    assert resolve_ledger("Decoration").is_decoration
    assert not resolve_ledger("Food").is_decoration


@pytest.mark.parametrize("service_name", ["", "   ", None, "!!!"])
def test_unusable_service_names_are_rejected(service_name) -> None:
    with pytest.raises(InvalidLedgerNameError):
        resolve_ledger(service_name)
