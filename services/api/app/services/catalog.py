from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from services.api.app.db.models import MenuItem
from sqlalchemy.orm import Session


class MenuCatalog(Protocol):
    def lookup_many(self, item_ids: Iterable[int]) -> list[MenuItem]: ...


class SqlMenuCatalog:
    """Menu catalog backed by the ``menu_items`` table.

    Lookups run on the caller's session so they share its transaction.
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def lookup_many(self, item_ids: Iterable[int]) -> list[MenuItem]:
        ids = sorted(set(item_ids))
        if not ids:
            return []
        return self._db.query(MenuItem).filter(MenuItem.id.in_(ids)).all()
