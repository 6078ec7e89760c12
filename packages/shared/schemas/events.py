"""Shared event schema (v1).

The backend stores an append-only order event log. The staff dashboard can consume these
events to render an audit trail for an order.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class EventTypeV1(str, Enum):
    ORDER_CREATED = "ORDER_CREATED"
    ORDER_STATUS_CHANGED = "ORDER_STATUS_CHANGED"


class EventV1(BaseModel):
    id: str
    order_id: int
    user_id: int | None = None

    event_type: EventTypeV1
    payload: dict[str, Any] = Field(default_factory=dict)
    created_at: str
