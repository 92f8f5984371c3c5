from __future__ import annotations

from slotdine.application.dto.requests import MoneyPayload, OrderLinePayload
from slotdine.application.dto.responses import (
    LedgerOrderResponse,
    MoneyResponse,
    OrderedItemResponse,
)
from slotdine.domain.common.ids import CartLineId, LedgerName, OrderedItemId, TicketId
from slotdine.domain.common.money import Money
from slotdine.domain.menu.entities import resolve_veg_type
from slotdine.domain.order.cart import CartLine
from slotdine.domain.order.entities import OrderedItem, OrderRecord, OrderStatus


def _money_response(money: Money) -> MoneyResponse:
    return MoneyResponse(amountMinor=money.amount_minor, currency=money.currency)


def to_ledger_order_response(
    record: OrderRecord,
    decoration_fee: Money | None = None,
) -> LedgerOrderResponse:
    return LedgerOrderResponse(
        ticketId=str(record.ticket_id),
        ledger=str(record.ledger),
        status=record.status.value,
        items=[
            OrderedItemResponse(
                orderedItemId=str(item.ordered_item_id),
                lineId=str(item.line_id),
                name=item.name,
                unitPrice=_money_response(item.unit_price) if item.unit_price else None,
                quantity=item.quantity,
                lineTotal=_money_response(item.line_total),
                isDecorationCharge=item.is_decoration_charge,
                vegType=item.veg_type,
                variantKey=item.variant_key,
                category=item.category,
            )
            for item in record.items
        ],
        subtotal=_money_response(record.subtotal),
        total=_money_response(record.total(decoration_fee)),
        updatedAt=record.updated_at,
    )


def to_order_record(response: LedgerOrderResponse) -> OrderRecord:
    return OrderRecord(
        ticket_id=TicketId(response.ticketId),
        ledger=LedgerName(response.ledger),
        status=OrderStatus(response.status),
        items=tuple(
            OrderedItem(
                ordered_item_id=OrderedItemId(item.orderedItemId),
                line_id=CartLineId(item.lineId),
                name=item.name,
                unit_price=(
                    Money(amount_minor=item.unitPrice.amountMinor, currency=item.unitPrice.currency)
                    if item.unitPrice
                    else None
                ),
                quantity=item.quantity,
                is_decoration_charge=item.isDecorationCharge,
                veg_type=resolve_veg_type(item.vegType),
                variant_key=item.variantKey,
                category=item.category,
            )
            for item in response.items
        ),
        updated_at=response.updatedAt,
    )


def to_cart_line(payload: OrderLinePayload, is_decoration_ledger: bool = False) -> CartLine:
    unit_price = payload.unit_price
    return CartLine(
        line_id=CartLineId(payload.line_id),
        name=payload.name,
        unit_price=(
            Money(amount_minor=unit_price.amount_minor, currency=unit_price.currency)
            if unit_price
            else None
        ),
        quantity=payload.quantity,
        is_decoration_charge=payload.is_decoration_charge or is_decoration_ledger,
        veg_type=payload.veg_type,
        variant_key=payload.variant_key,
        category=payload.category,
    )


def to_line_payload(line: CartLine) -> OrderLinePayload:
    return OrderLinePayload(
        line_id=str(line.line_id),
        name=line.name,
        unit_price=(
            MoneyPayload(amount_minor=line.unit_price.amount_minor, currency=line.unit_price.currency)
            if line.unit_price
            else None
        ),
        quantity=line.quantity,
        is_decoration_charge=line.is_decoration_charge,
        veg_type=line.veg_type,
        variant_key=line.variant_key,
        category=line.category,
    )
