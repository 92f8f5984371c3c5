from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class MoneyResponse(BaseModel):
    amountMinor: int
    currency: str


class OrderedItemResponse(BaseModel):
    orderedItemId: str
    lineId: str
    name: str
    unitPrice: MoneyResponse | None = None
    quantity: int
    lineTotal: MoneyResponse
    isDecorationCharge: bool = False
    vegType: str = "veg"
    variantKey: str | None = None
    category: str | None = None


class LedgerOrderResponse(BaseModel):
    ticketId: str
    ledger: str
    status: str
    items: list[OrderedItemResponse] = Field(default_factory=list)
    subtotal: MoneyResponse
    total: MoneyResponse
    updatedAt: datetime | None = None


class OrderMutationResponse(BaseModel):
    success: bool
    order: LedgerOrderResponse | None = None
    error: str | None = None


class OccasionDetailResponse(BaseModel):
    label: str
    value: str


class OccasionResponse(BaseModel):
    kind: str
    label: str | None = None
    fields: dict[str, str] = Field(default_factory=dict)
    details: list[OccasionDetailResponse] = Field(default_factory=list)


class ReservationResponse(BaseModel):
    ticketId: str
    date: str | None = None
    timeRange: str | None = None
    guestName: str | None = None
    theaterName: str | None = None
    numberOfPeople: int | None = None
    occasion: OccasionResponse


class ReservationLookupResponse(BaseModel):
    reservation: ReservationResponse
    existingOrders: dict[str, LedgerOrderResponse] = Field(default_factory=dict)


class MenuFeedResponse(BaseModel):
    services: list[dict[str, Any]] = Field(default_factory=list)
    fetchedAt: datetime
