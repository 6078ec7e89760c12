from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from services.api.app.db.deps import get_db
from services.api.app.models.menu import (
    MenuItemCreate,
    MenuItemEnvelope,
    MenuItemListEnvelope,
    MenuItemUpdate,
    MessageEnvelope,
)
from services.api.app.services import menu
from services.api.app.services.errors import OrderingError
from services.api.app.services.identity import Principal, require_staff
from sqlalchemy.orm import Session

router = APIRouter()


def _raise_menu_http_error(e: OrderingError) -> None:
    raise HTTPException(status_code=e.status_code, detail=str(e)) from e


@router.get("/v1/menu", response_model=MenuItemListEnvelope)
def list_menu(
    category: str | None = None,
    available: bool | None = None,
    db: Session = Depends(get_db),
) -> MenuItemListEnvelope:
    rows = menu.list_menu_items(db, category=category, available=available)
    return MenuItemListEnvelope(count=len(rows), data=rows)


@router.get("/v1/menu/{item_id}", response_model=MenuItemEnvelope)
def get_menu_item(item_id: int, db: Session = Depends(get_db)) -> MenuItemEnvelope:
    try:
        item = menu.get_menu_item(db, item_id)
    except OrderingError as e:
        _raise_menu_http_error(e)

    return MenuItemEnvelope(data=menu.to_menu_item_out(item))


@router.post("/v1/menu", response_model=MenuItemEnvelope, status_code=201)
def add_menu_item(
    payload: MenuItemCreate,
    _staff: Principal = Depends(require_staff),
    db: Session = Depends(get_db),
) -> MenuItemEnvelope:
    try:
        item = menu.create_menu_item(db, payload)
    except OrderingError as e:
        _raise_menu_http_error(e)

    return MenuItemEnvelope(message="Menu item added successfully", data=item)


@router.put("/v1/menu/{item_id}", response_model=MenuItemEnvelope)
def update_menu_item(
    item_id: int,
    payload: MenuItemUpdate,
    _staff: Principal = Depends(require_staff),
    db: Session = Depends(get_db),
) -> MenuItemEnvelope:
    try:
        item = menu.update_menu_item(db, item_id, payload)
    except OrderingError as e:
        _raise_menu_http_error(e)

    return MenuItemEnvelope(message="Menu item updated successfully", data=item)


@router.delete("/v1/menu/{item_id}", response_model=MessageEnvelope)
def delete_menu_item(
    item_id: int,
    _staff: Principal = Depends(require_staff),
    db: Session = Depends(get_db),
) -> MessageEnvelope:
    try:
        menu.delete_menu_item(db, item_id)
    except OrderingError as e:
        _raise_menu_http_error(e)

    return MessageEnvelope(message="Menu item deleted successfully")
