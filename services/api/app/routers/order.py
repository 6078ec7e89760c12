from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from services.api.app.db.deps import get_catalog, get_db
from services.api.app.models.order import (
    OrderCreateRequest,
    OrderEnvelope,
    OrderListEnvelope,
    OrderStatusUpdateRequest,
)
from services.api.app.services import order_views, orders
from services.api.app.services.catalog import MenuCatalog
from services.api.app.services.errors import OrderingError
from services.api.app.services.identity import Principal, get_current_principal, require_staff
from services.api.app.services.order_status import parse_status_filter
from sqlalchemy.orm import Session

router = APIRouter()


def _raise_ordering_http_error(e: Exception) -> None:
    if isinstance(e, OrderingError):
        raise HTTPException(status_code=e.status_code, detail=str(e)) from e

    raise HTTPException(status_code=500, detail="Internal Server Error") from e


@router.post("/v1/orders", response_model=OrderEnvelope, status_code=201)
def place_order(
    payload: OrderCreateRequest,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
    catalog: MenuCatalog = Depends(get_catalog),
) -> OrderEnvelope:
    try:
        order = orders.create_order(db, principal.id, payload.items, catalog=catalog)
    except OrderingError as e:
        _raise_ordering_http_error(e)

    return OrderEnvelope(message="Order created successfully", data=order)


@router.get("/v1/orders/mine", response_model=OrderListEnvelope)
def my_orders(
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
) -> OrderListEnvelope:
    rows = order_views.list_my_orders(db, principal.id)
    return OrderListEnvelope(count=len(rows), data=rows)


@router.get("/v1/orders/all", response_model=OrderListEnvelope)
def all_orders(
    status: str | None = None,
    _staff: Principal = Depends(require_staff),
    db: Session = Depends(get_db),
) -> OrderListEnvelope:
    try:
        rows = order_views.list_all_orders(db, parse_status_filter(status))
    except OrderingError as e:
        _raise_ordering_http_error(e)

    return OrderListEnvelope(count=len(rows), data=rows)


@router.get("/v1/orders/{order_id}", response_model=OrderEnvelope)
def get_order(
    order_id: int,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
) -> OrderEnvelope:
    try:
        order = order_views.get_order(db, order_id, principal)
    except OrderingError as e:
        _raise_ordering_http_error(e)

    return OrderEnvelope(data=order)


@router.put("/v1/orders/{order_id}/status", response_model=OrderEnvelope)
def update_order_status(
    order_id: int,
    payload: OrderStatusUpdateRequest,
    staff: Principal = Depends(require_staff),
    db: Session = Depends(get_db),
) -> OrderEnvelope:
    try:
        order = orders.set_status(db, order_id, payload.status, actor_id=staff.id)
    except OrderingError as e:
        _raise_ordering_http_error(e)

    return OrderEnvelope(message="Order status updated successfully", data=order)
