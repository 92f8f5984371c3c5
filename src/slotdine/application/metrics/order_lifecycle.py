from __future__ import annotations

from prometheus_client import Counter

from slotdine.domain.order.entities import OrderRecord, OrderStatus

ORDER_MUTATIONS_TOTAL = Counter(
    "slotdine_order_mutations_total",
    "Total number of ledger mutations by action and outcome.",
    ["ledger", "action", "outcome"],
)

ORDER_TRANSITION_TOTAL = Counter(
    "slotdine_order_transition_total",
    "Total number of order lifecycle transitions.",
    ["from", "to"],
)

ORDERED_ITEMS_TOTAL = Counter(
    "slotdine_ordered_items_total",
    "Total quantity of items present in ledgers after a placement.",
    ["ledger"],
)

MENU_FEED_REQUESTS_TOTAL = Counter(
    "slotdine_menu_feed_requests_total",
    "Total number of menu feed requests by source.",
    ["source"],
)


def record_mutation(ledger: str, action: str, outcome: str) -> None:
    ORDER_MUTATIONS_TOTAL.labels(ledger=ledger, action=action, outcome=outcome).inc()


def record_transition(from_status: OrderStatus, to_status: OrderStatus) -> None:
    if from_status == to_status:
        return
    ORDER_TRANSITION_TOTAL.labels(**{"from": from_status.value, "to": to_status.value}).inc()


def record_placed_items(record: OrderRecord) -> None:
    ORDERED_ITEMS_TOTAL.labels(ledger=str(record.ledger)).inc(
        sum(item.quantity for item in record.items)
    )


def record_menu_feed_request(source: str) -> None:
    MENU_FEED_REQUESTS_TOTAL.labels(source=source).inc()
