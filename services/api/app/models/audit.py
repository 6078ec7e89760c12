from __future__ import annotations

from packages.shared.schemas.events import EventV1
from pydantic import BaseModel


class OrderEventListEnvelope(BaseModel):
    success: bool = True
    count: int
    data: list[EventV1]
