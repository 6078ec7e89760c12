from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field


class MenuItemCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: str | None = None
    price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    category: str = Field(..., min_length=1)
    image: str | None = None
    available: bool = True


class MenuItemUpdate(BaseModel):
    """Partial update. Only fields present in the request body are applied."""

    name: str | None = None
    description: str | None = None
    price: Decimal | None = None
    category: str | None = None
    image: str | None = None
    available: bool | None = None


class MenuItemOut(BaseModel):
    id: int
    name: str
    description: str | None = None
    price: Decimal
    category: str
    image: str | None = None
    available: bool


class MenuItemEnvelope(BaseModel):
    success: bool = True
    message: str | None = None
    data: MenuItemOut


class MenuItemListEnvelope(BaseModel):
    success: bool = True
    count: int
    data: list[MenuItemOut]


class MessageEnvelope(BaseModel):
    success: bool = True
    message: str
