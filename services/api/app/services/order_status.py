from __future__ import annotations

from datetime import datetime
from typing import Any

from packages.shared.schemas.order_v1 import OrderStatusV1
from services.api.app.db.models import Order
from services.api.app.services.errors import ValidationError

INITIAL_STATUS = OrderStatusV1.RECEIVED
TERMINAL_STATUS = OrderStatusV1.COMPLETED

# Staff may move an order between any of these, in any direction.
SETTABLE_STATUSES: tuple[OrderStatusV1, ...] = (
    OrderStatusV1.RECEIVED,
    OrderStatusV1.PREPARING,
    OrderStatusV1.READY,
    OrderStatusV1.COMPLETED,
)

_INVALID_STATUS_MESSAGE = "Invalid status. Must be one of: " + ", ".join(
    s.value for s in SETTABLE_STATUSES
)


def parse_settable_status(value: Any) -> OrderStatusV1:
    if isinstance(value, str):
        for status in SETTABLE_STATUSES:
            if status.value == value:
                return status
    raise ValidationError(_INVALID_STATUS_MESSAGE)


def parse_status_filter(value: str | None) -> OrderStatusV1 | None:
    if value is None or value == "":
        return None
    try:
        return OrderStatusV1(value)
    except ValueError as e:
        allowed = ", ".join(s.value for s in OrderStatusV1)
        raise ValidationError(f"Invalid status filter. Must be one of: {allowed}") from e


def is_transition_allowed(current: str, new: OrderStatusV1) -> bool:
    del current
    return new in SETTABLE_STATUSES


def apply_status(order: Order, new: OrderStatusV1, *, now: datetime | None = None) -> str:
    """Move ``order`` to ``new`` and return the previous status.

    Only ``status`` and ``updated_at`` are touched.
    """

    if not is_transition_allowed(order.status, new):
        raise ValidationError(_INVALID_STATUS_MESSAGE)

    previous = order.status
    order.status = new.value
    order.updated_at = now or datetime.utcnow()
    return previous
