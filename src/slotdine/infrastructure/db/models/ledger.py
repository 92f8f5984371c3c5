from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    ForeignKeyConstraint,
    Index,
    Integer,
    String,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from slotdine.infrastructure.db.models.reservation import Base


class LedgerModel(Base):
    __tablename__ = "ledgers"

    ticket_id: Mapped[str] = mapped_column(
        String(50),
        ForeignKey("reservations.ticket_id", ondelete="CASCADE"),
        primary_key=True,
    )
    ledger: Mapped[str] = mapped_column(String(64), primary_key=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    items: Mapped[list["OrderedItemModel"]] = relationship(
        back_populates="ledger_row",
        cascade="all, delete-orphan",
        order_by="OrderedItemModel.position",
    )


class OrderedItemModel(Base):
    __tablename__ = "ordered_items"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    ticket_id: Mapped[str] = mapped_column(String(50), nullable=False)
    ledger: Mapped[str] = mapped_column(String(64), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    line_id: Mapped[str] = mapped_column(String(150), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    unit_price_minor: Mapped[int | None] = mapped_column(Integer, nullable=True)
    currency: Mapped[str] = mapped_column(String(3), nullable=False)
    is_decoration_charge: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        server_default="false",
    )
    veg_type: Mapped[str] = mapped_column(String(10), nullable=False)
    variant_key: Mapped[str | None] = mapped_column(String(20), nullable=True)
    category: Mapped[str | None] = mapped_column(String(255), nullable=True)

    ledger_row: Mapped[LedgerModel] = relationship(back_populates="items")

    __table_args__ = (
        ForeignKeyConstraint(
            ["ticket_id", "ledger"],
            ["ledgers.ticket_id", "ledgers.ledger"],
            ondelete="CASCADE",
        ),
        Index("ix_ordered_items_ticket_ledger", "ticket_id", "ledger"),
    )
