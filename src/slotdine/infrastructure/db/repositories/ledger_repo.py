from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Engine, delete, select
from sqlalchemy.orm import Session, selectinload

from slotdine.application.ports.repositories import LedgerRepository
from slotdine.domain.common.ids import CartLineId, LedgerName, OrderedItemId, TicketId
from slotdine.domain.common.money import Money
from slotdine.domain.menu.entities import resolve_veg_type
from slotdine.domain.order.entities import OrderedItem, OrderRecord, OrderStatus
from slotdine.infrastructure.db.models.ledger import LedgerModel, OrderedItemModel
from slotdine.infrastructure.db.session import get_engine


class SqlAlchemyLedgerRepository(LedgerRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def get(self, ticket_id: TicketId, ledger: LedgerName) -> OrderRecord | None:
        statement = (
            select(LedgerModel)
            .options(selectinload(LedgerModel.items))
            .where(
                LedgerModel.ticket_id == str(ticket_id),
                LedgerModel.ledger == str(ledger),
            )
            .limit(1)
        )
        with Session(self._engine) as session:
            model = session.execute(statement).scalar_one_or_none()
            if model is None:
                return None
            return self._to_domain(model)

    def list_for_ticket(self, ticket_id: TicketId) -> list[OrderRecord]:
        statement = (
            select(LedgerModel)
            .options(selectinload(LedgerModel.items))
            .where(LedgerModel.ticket_id == str(ticket_id))
            .order_by(LedgerModel.ledger)
        )
        with Session(self._engine) as session:
            models = list(session.execute(statement).scalars().all())
            return [self._to_domain(model) for model in models]

    def save(self, record: OrderRecord) -> OrderRecord:
        """Write the full item list of one ledger, replacing what was stored."""
        updated_at = record.updated_at or datetime.now(timezone.utc)
        with Session(self._engine) as session:
            model = session.get(LedgerModel, (str(record.ticket_id), str(record.ledger)))
            if model is None:
                model = LedgerModel(ticket_id=str(record.ticket_id), ledger=str(record.ledger))
                session.add(model)
            model.status = record.status.value
            model.updated_at = updated_at

            session.execute(
                delete(OrderedItemModel).where(
                    OrderedItemModel.ticket_id == str(record.ticket_id),
                    OrderedItemModel.ledger == str(record.ledger),
                )
            )
            session.add_all(
                [
                    self._item_to_model(model, position, item)
                    for position, item in enumerate(record.items)
                ]
            )
            session.commit()

        saved = self.get(record.ticket_id, record.ledger)
        if saved is None:
            raise RuntimeError(f"ledger {record.ledger} for {record.ticket_id} not found after save")
        return saved

    def _item_to_model(
        self,
        ledger_row: LedgerModel,
        position: int,
        item: OrderedItem,
    ) -> OrderedItemModel:
        return OrderedItemModel(
            id=str(item.ordered_item_id),
            ticket_id=ledger_row.ticket_id,
            ledger=ledger_row.ledger,
            ledger_row=ledger_row,
            position=position,
            line_id=str(item.line_id),
            name=item.name,
            quantity=item.quantity,
            unit_price_minor=item.unit_price.amount_minor if item.unit_price else None,
            currency=item.unit_price.currency if item.unit_price else "INR",
            is_decoration_charge=item.is_decoration_charge,
            veg_type=item.veg_type,
            variant_key=item.variant_key,
            category=item.category,
        )

    def _to_domain(self, model: LedgerModel) -> OrderRecord:
        updated_at = model.updated_at
        if updated_at is not None and updated_at.tzinfo is None:
            updated_at = updated_at.replace(tzinfo=timezone.utc)

        items = tuple(
            OrderedItem(
                ordered_item_id=OrderedItemId(item.id),
                line_id=CartLineId(item.line_id),
                name=item.name,
                unit_price=(
                    Money(amount_minor=item.unit_price_minor, currency=item.currency)
                    if item.unit_price_minor is not None
                    else None
                ),
                quantity=item.quantity,
                is_decoration_charge=item.is_decoration_charge,
                veg_type=resolve_veg_type(item.veg_type),
                variant_key=item.variant_key,
                category=item.category,
            )
            for item in model.items
        )
        return OrderRecord(
            ticket_id=TicketId(model.ticket_id),
            ledger=LedgerName(model.ledger),
            status=OrderStatus(model.status),
            items=items,
            updated_at=updated_at,
        )
