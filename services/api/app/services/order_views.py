"""Nested order projections.

Orders are fetched first, then their line items (left-joined to menu names) and owners in
one batch each, and the nested shape is assembled here rather than in SQL.
"""

from __future__ import annotations

from collections import defaultdict

from packages.shared.schemas.order_v1 import OrderStatusV1
from services.api.app.db.models import MenuItem, Order, OrderItem, User
from services.api.app.models.order import OrderLineOut, OrderOut
from services.api.app.services.errors import AuthorizationError, NotFoundError
from services.api.app.services.identity import Principal
from services.api.app.services.pricing import to_money
from sqlalchemy.orm import Session


def list_my_orders(db: Session, user_id: int) -> list[OrderOut]:
    orders = (
        db.query(Order)
        .filter(Order.user_id == user_id)
        .order_by(Order.created_at.desc(), Order.id.desc())
        .all()
    )
    return assemble_orders(db, orders, include_user=False)


def list_all_orders(db: Session, status: OrderStatusV1 | None = None) -> list[OrderOut]:
    query = db.query(Order)
    if status is not None:
        query = query.filter(Order.status == status.value)

    orders = query.order_by(Order.created_at.desc(), Order.id.desc()).all()
    return assemble_orders(db, orders, include_user=True)


def load_order(db: Session, order_id: int, *, include_user: bool) -> OrderOut:
    order = db.get(Order, order_id)
    if order is None:
        raise NotFoundError("Order not found")
    return assemble_orders(db, [order], include_user=include_user)[0]


def get_order(db: Session, order_id: int, principal: Principal) -> OrderOut:
    view = load_order(db, order_id, include_user=principal.is_staff)
    if not principal.is_staff and view.user_id != principal.id:
        raise AuthorizationError("Not authorized to view this order")
    return view


def assemble_orders(db: Session, orders: list[Order], *, include_user: bool) -> list[OrderOut]:
    if not orders:
        return []

    order_ids = [o.id for o in orders]
    rows = (
        db.query(OrderItem, MenuItem.name)
        .outerjoin(MenuItem, MenuItem.id == OrderItem.item_id)
        .filter(OrderItem.order_id.in_(order_ids))
        .order_by(OrderItem.order_id, OrderItem.id)
        .all()
    )

    lines_by_order: dict[int, list[OrderLineOut]] = defaultdict(list)
    for line, name in rows:
        price = to_money(line.price)
        lines_by_order[line.order_id].append(
            OrderLineOut(
                item_id=line.item_id,
                name=name,
                quantity=line.quantity,
                price=price,
                subtotal=to_money(price * line.quantity),
            )
        )

    users: dict[int, User] = {}
    if include_user:
        user_ids = {o.user_id for o in orders}
        users = {u.id: u for u in db.query(User).filter(User.id.in_(user_ids)).all()}

    out: list[OrderOut] = []
    for order in orders:
        user = users.get(order.user_id)
        out.append(
            OrderOut(
                id=order.id,
                user_id=order.user_id,
                total_amount=to_money(order.total_amount),
                status=order.status,
                created_at=order.created_at.isoformat(),
                updated_at=order.updated_at.isoformat() if order.updated_at else None,
                user_name=user.name if user else None,
                user_email=user.email if user else None,
                items=lines_by_order.get(order.id, []),
            )
        )

    return out
