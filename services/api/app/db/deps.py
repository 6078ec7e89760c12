from __future__ import annotations

from collections.abc import Generator

from fastapi import Depends
from services.api.app.db.database import db_session
from services.api.app.services.catalog import MenuCatalog, SqlMenuCatalog
from sqlalchemy.orm import Session


def get_db() -> Generator[Session, None, None]:
    db = db_session()
    try:
        yield db
    finally:
        db.close()


def get_catalog(db: Session = Depends(get_db)) -> MenuCatalog:
    return SqlMenuCatalog(db)
