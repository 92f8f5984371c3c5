from __future__ import annotations

from datetime import date
from typing import Any

from sqlalchemy import Engine, select
from sqlalchemy.orm import Session

from slotdine.application.ports.repositories import ReservationRepository
from slotdine.domain.booking.entities import (
    Anniversary,
    Birthday,
    CustomOccasion,
    DateNight,
    Occasion,
    Proposal,
    Reservation,
    resolve_occasion,
)
from slotdine.domain.common.ids import TicketId
from slotdine.infrastructure.db.models.reservation import ReservationModel
from slotdine.infrastructure.db.session import get_engine


class SqlAlchemyReservationRepository(ReservationRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def get(self, ticket_id: TicketId) -> Reservation | None:
        statement = (
            select(ReservationModel).where(ReservationModel.ticket_id == str(ticket_id)).limit(1)
        )
        with Session(self._engine) as session:
            model = session.execute(statement).scalar_one_or_none()

        if model is None:
            return None
        return self._to_domain(model)

    def add(self, reservation: Reservation) -> None:
        with Session(self._engine) as session:
            session.add(self._to_model(reservation))
            session.commit()

    def _to_domain(self, model: ReservationModel) -> Reservation:
        record: dict[str, Any] = dict(model.occasion_fields or {})
        record["occasion"] = model.occasion
        return Reservation(
            ticket_id=TicketId(model.ticket_id),
            date=model.booking_date,
            time_range=model.time_slot,
            occasion=resolve_occasion(record),
            guest_name=model.guest_name,
            theater_name=model.theater_name,
            number_of_people=model.number_of_people,
        )

    def _to_model(self, reservation: Reservation) -> ReservationModel:
        booking_date = reservation.date
        label, fields = _occasion_columns(reservation.occasion)
        return ReservationModel(
            ticket_id=str(reservation.ticket_id),
            booking_date=booking_date.isoformat() if isinstance(booking_date, date) else booking_date,
            time_slot=reservation.time_range,
            guest_name=reservation.guest_name,
            theater_name=reservation.theater_name,
            number_of_people=reservation.number_of_people,
            occasion=label,
            occasion_fields=fields,
        )


def _occasion_columns(occasion: Occasion) -> tuple[str | None, dict[str, Any]]:
    if isinstance(occasion, Birthday):
        fields = {"birthdayName": occasion.name}
        if occasion.gender:
            fields["birthdayGender"] = occasion.gender
        return "Birthday", fields
    if isinstance(occasion, Anniversary):
        return "Anniversary", {
            "partner1Name": occasion.partner1,
            "partner2Name": occasion.partner2,
        }
    if isinstance(occasion, DateNight):
        return "Date Night", {"dateNightName": occasion.name}
    if isinstance(occasion, Proposal):
        return "Proposal", {
            "proposerName": occasion.proposer,
            "proposalPartnerName": occasion.partner,
        }
    if isinstance(occasion, CustomOccasion):
        fields: dict[str, Any] = {}
        for index, (label, value) in enumerate(occasion.details):
            fields[f"detail{index}_label"] = label
            fields[f"detail{index}"] = value
        return occasion.label, fields
    return None, {}
