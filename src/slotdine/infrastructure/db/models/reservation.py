from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Integer, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class ReservationModel(Base):
    __tablename__ = "reservations"

    ticket_id: Mapped[str] = mapped_column(String(50), primary_key=True)
    booking_date: Mapped[str | None] = mapped_column(String(64), nullable=True)
    time_slot: Mapped[str | None] = mapped_column(String(64), nullable=True)
    guest_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    theater_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    number_of_people: Mapped[int | None] = mapped_column(Integer, nullable=True)
    occasion: Mapped[str | None] = mapped_column(String(100), nullable=True)
    # raw occasion form fields, e.g. birthdayName or <key>_label pairs
    occasion_fields: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
