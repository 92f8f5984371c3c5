from __future__ import annotations

from datetime import date

from slotdine.application.dto.responses import (
    OccasionDetailResponse,
    OccasionResponse,
    ReservationResponse,
)
from slotdine.domain.booking.entities import (
    Anniversary,
    Birthday,
    CustomOccasion,
    DateNight,
    NoOccasion,
    Occasion,
    Proposal,
    Reservation,
)
from slotdine.domain.common.ids import TicketId


def to_occasion_response(occasion: Occasion) -> OccasionResponse:
    if isinstance(occasion, Birthday):
        fields = {"name": occasion.name}
        if occasion.gender:
            fields["gender"] = occasion.gender
        return OccasionResponse(kind=occasion.kind, label="Birthday", fields=fields)
    if isinstance(occasion, Anniversary):
        return OccasionResponse(
            kind=occasion.kind,
            label="Anniversary",
            fields={"partner1": occasion.partner1, "partner2": occasion.partner2},
        )
    if isinstance(occasion, DateNight):
        return OccasionResponse(kind=occasion.kind, label="Date Night", fields={"name": occasion.name})
    if isinstance(occasion, Proposal):
        return OccasionResponse(
            kind=occasion.kind,
            label="Proposal",
            fields={"proposer": occasion.proposer, "partner": occasion.partner},
        )
    if isinstance(occasion, CustomOccasion):
        return OccasionResponse(
            kind=occasion.kind,
            label=occasion.label,
            details=[OccasionDetailResponse(label=label, value=value) for label, value in occasion.details],
        )
    return OccasionResponse(kind=NoOccasion().kind)


def to_occasion(response: OccasionResponse) -> Occasion:
    fields = response.fields
    if response.kind == "birthday" and fields.get("name"):
        return Birthday(name=fields["name"], gender=fields.get("gender"))
    if response.kind == "anniversary" and fields.get("partner1") and fields.get("partner2"):
        return Anniversary(partner1=fields["partner1"], partner2=fields["partner2"])
    if response.kind == "date_night" and fields.get("name"):
        return DateNight(name=fields["name"])
    if response.kind == "proposal" and fields.get("proposer") and fields.get("partner"):
        return Proposal(proposer=fields["proposer"], partner=fields["partner"])
    if response.kind == "custom" and response.label:
        return CustomOccasion(
            label=response.label,
            details=tuple((detail.label, detail.value) for detail in response.details),
        )
    return NoOccasion()


def to_reservation_response(reservation: Reservation) -> ReservationResponse:
    booking_date = reservation.date
    return ReservationResponse(
        ticketId=str(reservation.ticket_id),
        date=booking_date.isoformat() if isinstance(booking_date, date) else booking_date,
        timeRange=reservation.time_range,
        guestName=reservation.guest_name,
        theaterName=reservation.theater_name,
        numberOfPeople=reservation.number_of_people,
        occasion=to_occasion_response(reservation.occasion),
    )


def to_reservation(response: ReservationResponse) -> Reservation:
    return Reservation(
        ticket_id=TicketId(response.ticketId),
        date=response.date,
        time_range=response.timeRange,
        occasion=to_occasion(response.occasion),
        guest_name=response.guestName,
        theater_name=response.theaterName,
        number_of_people=response.numberOfPeople,
    )
