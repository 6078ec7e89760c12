from __future__ import annotations

from datetime import datetime

from services.api.app.db.database import transaction
from services.api.app.db.models import MenuItem
from services.api.app.logging_config import get_logger
from services.api.app.models.menu import MenuItemCreate, MenuItemOut, MenuItemUpdate
from services.api.app.services.errors import NotFoundError, StorageError, ValidationError
from services.api.app.services.pricing import to_money
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

log = get_logger(__name__)

# Columns a MenuItemUpdate may touch. Anything else in the payload is ignored.
_UPDATABLE_FIELDS = ("name", "description", "price", "category", "image", "available")
_REQUIRED_FIELDS = {"name", "price", "category", "available"}


def to_menu_item_out(item: MenuItem) -> MenuItemOut:
    return MenuItemOut(
        id=item.id,
        name=item.name,
        description=item.description,
        price=to_money(item.price),
        category=item.category,
        image=item.image,
        available=item.available,
    )


def list_menu_items(
    db: Session,
    *,
    category: str | None = None,
    available: bool | None = None,
) -> list[MenuItemOut]:
    query = db.query(MenuItem)
    if category:
        query = query.filter(MenuItem.category == category)
    if available is not None:
        query = query.filter(MenuItem.available == available)

    items = query.order_by(MenuItem.category, MenuItem.name).all()
    return [to_menu_item_out(i) for i in items]


def get_menu_item(db: Session, item_id: int) -> MenuItem:
    item = db.get(MenuItem, item_id)
    if item is None:
        raise NotFoundError("Menu item not found")
    return item


def create_menu_item(db: Session, payload: MenuItemCreate) -> MenuItemOut:
    item = MenuItem(
        name=payload.name,
        description=payload.description,
        price=to_money(payload.price),
        category=payload.category,
        image=payload.image,
        available=payload.available,
    )
    try:
        with transaction(db):
            db.add(item)
            db.flush()
    except SQLAlchemyError as e:
        log.exception("Add menu item failed")
        raise StorageError("Server error while adding menu item") from e

    log.info("Menu item %s added: %s", item.id, payload.name)
    return to_menu_item_out(item)


def apply_menu_update(item: MenuItem, update: MenuItemUpdate) -> list[str]:
    """Apply the fields present in ``update`` one by one; return their names."""

    changes = update.model_dump(exclude_unset=True)
    fields = [f for f in _UPDATABLE_FIELDS if f in changes]
    if not fields:
        raise ValidationError("No fields to update")

    for field in fields:
        value = changes[field]
        if value is None and field in _REQUIRED_FIELDS:
            raise ValidationError(f"{field} cannot be null")
        if field == "price":
            value = to_money(value)
            if value <= 0:
                raise ValidationError("Price must be a positive number")
        setattr(item, field, value)

    item.updated_at = datetime.utcnow()
    return fields


def update_menu_item(db: Session, item_id: int, update: MenuItemUpdate) -> MenuItemOut:
    try:
        with transaction(db):
            item = get_menu_item(db, item_id)
            fields = apply_menu_update(item, update)
    except SQLAlchemyError as e:
        log.exception("Update menu item %s failed", item_id)
        raise StorageError("Server error while updating menu item") from e

    log.info("Menu item %s updated: %s", item_id, ", ".join(fields))
    return to_menu_item_out(item)


def delete_menu_item(db: Session, item_id: int) -> None:
    try:
        with transaction(db):
            db.delete(get_menu_item(db, item_id))
    except SQLAlchemyError as e:
        log.exception("Delete menu item %s failed", item_id)
        raise StorageError("Server error while deleting menu item") from e

    log.info("Menu item %s deleted", item_id)
