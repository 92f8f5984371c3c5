from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from slotdine.domain.booking.entities import (
    Anniversary,
    Birthday,
    CustomOccasion,
    DateNight,
    NoOccasion,
    Proposal,
    Reservation,
    normalize_ticket_id,
    resolve_occasion,
)
from slotdine.domain.common.ids import TicketId


def test_ticket_ids_are_trimmed_and_upper_cased() -> None:
    assert normalize_ticket_id("  slt-1001 ") == "SLT-1001"
    assert normalize_ticket_id(None) == ""


def test_reservation_requires_ticket_id() -> None:
    with pytest.raises(ValueError):
        Reservation(ticket_id=TicketId("  "), date="2024-06-01", time_range="6:00 PM - 9:00 PM")


def test_known_occasions_read_their_named_fields() -> None:
    assert resolve_occasion({"occasion": "Birthday Party", "birthdayName": "Aarav"}) == Birthday(
        name="Aarav"
    )
    assert resolve_occasion(
        {"occasion": "Anniversary", "partner1Name": "Riya", "partner2Name": "Kabir"}
    ) == Anniversary(partner1="Riya", partner2="Kabir")
    assert resolve_occasion({"occasion": "Date Night", "dateNightName": "Mira"}) == DateNight(
        name="Mira"
    )
    assert resolve_occasion(
        {"occasion": "Proposal", "proposerName": "Dev", "proposalPartnerName": "Isha"}
    ) == Proposal(proposer="Dev", partner="Isha")


def test_missing_occasion_is_none() -> None:
    assert resolve_occasion({}) == NoOccasion()
    assert resolve_occasion({"occasion": "   "}) == NoOccasion()


def test_incomplete_known_occasion_degrades_to_custom() -> None:
    occasion = resolve_occasion({"occasion": "Anniversary", "partner1Name": "Riya"})
    assert occasion == CustomOccasion(label="Anniversary")


def test_custom_occasion_collects_labelled_details() -> None:
    occasion = resolve_occasion(
        {
            "occasion": "Farewell",
            "farewell_label": "Farewell for",
            "farewell": "Neha",
            "cake_label": "Cake flavour",
            "cake_value": "Chocolate",
            "empty_label": "Ignored",
        }
    )

    assert isinstance(occasion, CustomOccasion)
    assert occasion.label == "Farewell"
    assert occasion.details == (("Farewell for", "Neha"), ("Cake flavour", "Chocolate"))
