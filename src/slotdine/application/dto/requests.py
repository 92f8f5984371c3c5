from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from slotdine.domain.menu.entities import resolve_veg_type


def _to_camel(value: str) -> str:
    parts = value.split("_")
    return parts[0] + "".join(part.capitalize() for part in parts[1:])


class CamelBaseModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=_to_camel,
        populate_by_name=True,
    )


class MoneyPayload(CamelBaseModel):
    amount_minor: int = Field(ge=0)
    currency: Literal["INR"] = "INR"


class OrderLinePayload(CamelBaseModel):
    line_id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    unit_price: MoneyPayload | None = None
    quantity: int = Field(ge=1)
    is_decoration_charge: bool = False
    veg_type: Literal["veg", "non-veg"] = "veg"
    variant_key: str | None = None
    category: str | None = None

    @field_validator("veg_type", mode="before")
    @classmethod
    def _default_veg_type(cls, value: object) -> str:
        return resolve_veg_type(value)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("name must be non-empty")
        return stripped


class OrderMutationRequest(CamelBaseModel):
    items: list[OrderLinePayload] | None = None
    remove_item_ids: list[str] | None = None
    mark_delivered: bool = False

    @model_validator(mode="after")
    def _one_mode_per_call(self) -> OrderMutationRequest:
        if self.items is not None and self.remove_item_ids is not None:
            raise ValueError("items and removeItemIds are mutually exclusive")
        if self.items is None and self.remove_item_ids is None and not self.mark_delivered:
            raise ValueError("mutation must set items, removeItemIds or markDelivered")
        if self.remove_item_ids is not None:
            cleaned = [item_id.strip() for item_id in self.remove_item_ids if item_id.strip()]
            if not cleaned:
                raise ValueError("removeItemIds must contain at least one id")
            self.remove_item_ids = cleaned
        return self


class OrderStatusUpdateRequest(CamelBaseModel):
    status: Literal["received", "ready", "delivered"]
