"""Order placement and status changes.

Both operations run inside a single ``transaction`` scope: the order row, its line items and
the audit event are committed together or not at all.
"""

from __future__ import annotations

from typing import Any
from uuid import uuid4

from packages.shared.schemas.events import EventTypeV1, EventV1
from services.api.app.db.database import transaction
from services.api.app.db.models import Order, OrderEvent, OrderItem
from services.api.app.logging_config import get_logger
from services.api.app.models.order import OrderOut
from services.api.app.services.catalog import MenuCatalog, SqlMenuCatalog
from services.api.app.services.errors import NotFoundError, OrderingError, StorageError
from services.api.app.services.order_status import (
    INITIAL_STATUS,
    apply_status,
    parse_settable_status,
)
from services.api.app.services.order_views import load_order
from services.api.app.services.pricing import price_order
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

log = get_logger(__name__)


def create_order(
    db: Session,
    user_id: int,
    raw_items: Any,
    catalog: MenuCatalog | None = None,
) -> OrderOut:
    catalog = catalog or SqlMenuCatalog(db)

    try:
        with transaction(db):
            priced = price_order(catalog, raw_items)

            order = Order(
                user_id=user_id,
                total_amount=priced.total,
                status=INITIAL_STATUS.value,
            )
            db.add(order)
            db.flush()

            for line in priced.lines:
                db.add(
                    OrderItem(
                        order_id=order.id,
                        item_id=line.item_id,
                        quantity=line.quantity,
                        price=line.unit_price,
                    )
                )
            db.flush()

            _log_event(
                db,
                order_id=order.id,
                user_id=user_id,
                event_type=EventTypeV1.ORDER_CREATED,
                event_payload={
                    "total_amount": str(priced.total),
                    "line_count": len(priced.lines),
                },
            )
            order_id = order.id
    except OrderingError as e:
        log.warning("Order rejected for user=%s: %s", user_id, e)
        raise
    except SQLAlchemyError as e:
        log.exception("Create order failed for user=%s; transaction rolled back", user_id)
        raise StorageError("Server error while creating order") from e

    log.info("Order %s created for user=%s total=%s", order_id, user_id, priced.total)
    return _reload(db, order_id, include_user=False)


def set_status(
    db: Session,
    order_id: int,
    new_status: Any,
    *,
    actor_id: int | None = None,
) -> OrderOut:
    status = parse_settable_status(new_status)

    try:
        with transaction(db):
            order = db.get(Order, order_id)
            if order is None:
                raise NotFoundError("Order not found")

            previous = apply_status(order, status)
            _log_event(
                db,
                order_id=order.id,
                user_id=actor_id,
                event_type=EventTypeV1.ORDER_STATUS_CHANGED,
                event_payload={"from": previous, "to": status.value},
            )
    except SQLAlchemyError as e:
        log.exception("Status update failed for order=%s; transaction rolled back", order_id)
        raise StorageError("Server error while updating order status") from e

    log.info("Order %s status %s -> %s", order_id, previous, status.value)
    return _reload(db, order_id, include_user=True)


def list_order_events(db: Session, order_id: int) -> list[EventV1]:
    if db.get(Order, order_id) is None:
        raise NotFoundError("Order not found")

    events = (
        db.query(OrderEvent)
        .filter(OrderEvent.order_id == order_id)
        .order_by(OrderEvent.created_at, OrderEvent.id)
        .all()
    )
    return [
        EventV1(
            id=e.id,
            order_id=e.order_id,
            user_id=e.user_id,
            event_type=EventTypeV1(e.event_type),
            payload=e.event_payload_json,
            created_at=e.created_at.isoformat(),
        )
        for e in events
    ]


def _reload(db: Session, order_id: int, *, include_user: bool) -> OrderOut:
    try:
        return load_order(db, order_id, include_user=include_user)
    except SQLAlchemyError as e:
        log.exception("Reading back order=%s failed after commit", order_id)
        raise StorageError("Server error while loading order") from e


def _log_event(
    db: Session,
    *,
    order_id: int,
    user_id: int | None,
    event_type: EventTypeV1,
    event_payload: dict,
) -> None:
    db.add(
        OrderEvent(
            id=uuid4().hex,
            order_id=order_id,
            user_id=user_id,
            event_type=event_type.value,
            event_payload_json=event_payload,
        )
    )
    db.flush()
