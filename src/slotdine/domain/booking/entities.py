from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Mapping, Union

from slotdine.domain.common.ids import TicketId


@dataclass(frozen=True)
class NoOccasion:
    kind: str = "none"


@dataclass(frozen=True)
class Birthday:
    name: str
    gender: str | None = None
    kind: str = "birthday"


@dataclass(frozen=True)
class Anniversary:
    partner1: str
    partner2: str
    kind: str = "anniversary"


@dataclass(frozen=True)
class DateNight:
    name: str
    kind: str = "date_night"


@dataclass(frozen=True)
class Proposal:
    proposer: str
    partner: str
    kind: str = "proposal"


@dataclass(frozen=True)
class CustomOccasion:
    label: str
    details: tuple[tuple[str, str], ...] = ()
    kind: str = "custom"


Occasion = Union[NoOccasion, Birthday, Anniversary, DateNight, Proposal, CustomOccasion]


@dataclass(frozen=True)
class Reservation:
    ticket_id: TicketId
    date: date | str | None
    time_range: str | None
    occasion: Occasion = field(default_factory=NoOccasion)
    guest_name: str | None = None
    theater_name: str | None = None
    number_of_people: int | None = None

    def __post_init__(self) -> None:
        if not str(self.ticket_id).strip():
            raise ValueError("ticket_id must be non-empty")


def normalize_ticket_id(raw: object) -> TicketId:
    return TicketId(str(raw or "").strip().upper())


def resolve_occasion(record: Mapping[str, Any]) -> Occasion:
    """Build the typed occasion from a raw booking record.

    Known occasions read their own named fields. Anything else becomes a
    ``CustomOccasion`` whose details are the ``<key>_label`` pairs the booking
    form stored next to the value (``<key>`` or ``<key>_value``).
    """
    label = _text(record.get("occasion"))
    normalized = label.lower()

    if not label:
        return NoOccasion()
    if "birthday" in normalized:
        name = _text(record.get("birthdayName")) or _text(record.get("occasionPersonName"))
        if name:
            return Birthday(name=name, gender=_text(record.get("birthdayGender")) or None)
    elif "anniversary" in normalized:
        partner1 = _text(record.get("partner1Name"))
        partner2 = _text(record.get("partner2Name"))
        if partner1 and partner2:
            return Anniversary(partner1=partner1, partner2=partner2)
    elif "date night" in normalized:
        name = _text(record.get("dateNightName"))
        if name:
            return DateNight(name=name)
    elif "proposal" in normalized:
        proposer = _text(record.get("proposerName"))
        partner = _text(record.get("proposalPartnerName"))
        if proposer and partner:
            return Proposal(proposer=proposer, partner=partner)

    return CustomOccasion(label=label, details=_labelled_details(record))


def _labelled_details(record: Mapping[str, Any]) -> tuple[tuple[str, str], ...]:
    details: list[tuple[str, str]] = []
    for key in record:
        if not isinstance(key, str) or not key.endswith("_label") or "_value" in key:
            continue
        base_key = key[: -len("_label")]
        label = _text(record.get(key))
        value = _text(record.get(base_key)) or _text(record.get(f"{base_key}_value"))
        if label and value:
            details.append((label, value))
    return tuple(details)


def _text(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip()
