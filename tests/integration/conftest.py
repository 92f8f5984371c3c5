from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Iterator

import pytest
from sqlalchemy import Engine, delete

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from slotdine.domain.booking.entities import Anniversary, Birthday, CustomOccasion, Reservation
from slotdine.domain.common.ids import TicketId
from slotdine.infrastructure.db import session as db_session
from slotdine.infrastructure.db.models.ledger import LedgerModel, OrderedItemModel
from slotdine.infrastructure.db.models.reservation import Base, ReservationModel
from slotdine.infrastructure.db.repositories.reservation_repo import (
    SqlAlchemyReservationRepository,
)

BOOKING_DATE = "2024-06-01"

RESERVATIONS = (
    Reservation(
        ticket_id=TicketId("SLT-1001"),
        date=BOOKING_DATE,
        time_range="6:00 PM - 9:00 PM",
        occasion=Birthday(name="Asha"),
        guest_name="Asha Menon",
        theater_name="Screen 1",
        number_of_people=4,
    ),
    Reservation(
        ticket_id=TicketId("SLT-1002"),
        date=BOOKING_DATE,
        time_range="11:00 PM - 2:00 AM",
        occasion=Anniversary(partner1="Ravi", partner2="Meera"),
    ),
    Reservation(
        ticket_id=TicketId("SLT-1003"),
        date=BOOKING_DATE,
        time_range="2:00 PM - 5:00 PM",
        occasion=CustomOccasion(label="Farewell", details=(("Leaving", "Kiran"),)),
    ),
)


@pytest.fixture(scope="session", autouse=True)
def integration_environment(tmp_path_factory: pytest.TempPathFactory) -> Iterator[None]:
    database_path = tmp_path_factory.mktemp("db") / "slotdine.db"

    os.environ["DATABASE_URL"] = f"sqlite+pysqlite:///{database_path}"
    os.environ["APP_ENV"] = "test"
    os.environ.setdefault("OTEL_SERVICE_NAME", "slotdine-backend-test")
    os.environ.setdefault("OTEL_EXPORTER_OTLP_ENDPOINT", "")
    os.environ.pop("DECORATION_FEE", None)

    db_session._build_engine.cache_clear()
    Base.metadata.create_all(db_session.get_engine())
    yield
    db_session._build_engine.cache_clear()


@pytest.fixture
def engine() -> Engine:
    return db_session.get_engine()


@pytest.fixture(autouse=True)
def seeded_reservations(integration_environment: None) -> Iterator[None]:
    engine = db_session.get_engine()
    with engine.begin() as connection:
        connection.execute(delete(OrderedItemModel))
        connection.execute(delete(LedgerModel))
        connection.execute(delete(ReservationModel))

    repository = SqlAlchemyReservationRepository(engine)
    for reservation in RESERVATIONS:
        repository.add(reservation)
    yield
