from __future__ import annotations

from typing import NewType

TicketId = NewType("TicketId", str)
LedgerName = NewType("LedgerName", str)
MenuItemId = NewType("MenuItemId", str)
CartLineId = NewType("CartLineId", str)
OrderedItemId = NewType("OrderedItemId", str)
