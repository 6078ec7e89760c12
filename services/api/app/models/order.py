from __future__ import annotations

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field


class OrderCreateRequest(BaseModel):
    # Shape is checked by the pricing engine so failures use its messages.
    items: Any = None


class OrderStatusUpdateRequest(BaseModel):
    status: Any = None


class OrderLineOut(BaseModel):
    item_id: int
    name: str | None = None
    quantity: int
    price: Decimal
    subtotal: Decimal


class OrderOut(BaseModel):
    id: int
    user_id: int
    total_amount: Decimal
    status: str
    created_at: str
    updated_at: str | None = None

    # Staff views only.
    user_name: str | None = None
    user_email: str | None = None

    items: list[OrderLineOut] = Field(default_factory=list)


class OrderEnvelope(BaseModel):
    success: bool = True
    message: str | None = None
    data: OrderOut


class OrderListEnvelope(BaseModel):
    success: bool = True
    count: int
    data: list[OrderOut]
