from __future__ import annotations

from datetime import datetime

from sqlalchemy import inspect
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.orm import Session

from slotdine.infrastructure.config import venue_timezone
from slotdine.infrastructure.db.models.reservation import ReservationModel
from slotdine.infrastructure.db.session import get_engine


def _sample_reservations(booking_date: str) -> list[dict[str, object]]:
    return [
        {
            "ticket_id": "SLT-1001",
            "booking_date": booking_date,
            "time_slot": "6:00 PM - 9:00 PM",
            "guest_name": "Aarav Mehta",
            "theater_name": "Screen 2",
            "number_of_people": 4,
            "occasion": "Birthday",
            "occasion_fields": {"birthdayName": "Aarav", "birthdayGender": "male"},
        },
        {
            "ticket_id": "SLT-1002",
            "booking_date": booking_date,
            "time_slot": "11:00 PM - 2:00 AM",
            "guest_name": "Riya Sen",
            "theater_name": "Screen 1",
            "number_of_people": 2,
            "occasion": "Anniversary",
            "occasion_fields": {"partner1Name": "Riya", "partner2Name": "Kabir"},
        },
        {
            "ticket_id": "SLT-1003",
            "booking_date": booking_date,
            "time_slot": "12:00 PM - 3:00 PM",
            "guest_name": "Team Orbit",
            "theater_name": "Screen 3",
            "number_of_people": 8,
            "occasion": "Farewell",
            "occasion_fields": {
                "farewell_label": "Farewell for",
                "farewell": "Neha",
            },
        },
    ]


def main() -> None:
    engine = get_engine(timeout_seconds=2.0)
    inspector = inspect(engine)
    required_tables = {"reservations", "ledgers", "ordered_items"}
    if not required_tables.issubset(set(inspector.get_table_names(schema="public"))):
        print("no schema yet")
        return

    booking_date = datetime.now(venue_timezone()).date().isoformat()
    with Session(engine) as session:
        for reservation in _sample_reservations(booking_date):
            session.execute(
                insert(ReservationModel)
                .values(**reservation)
                .on_conflict_do_update(
                    index_elements=[ReservationModel.ticket_id],
                    set_={key: value for key, value in reservation.items() if key != "ticket_id"},
                )
            )

        session.commit()
        print("seed complete")


if __name__ == "__main__":
    main()
