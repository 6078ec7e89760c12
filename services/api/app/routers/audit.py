from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from services.api.app.db.deps import get_db
from services.api.app.models.audit import OrderEventListEnvelope
from services.api.app.services.errors import NotFoundError
from services.api.app.services.identity import Principal, require_staff
from services.api.app.services.orders import list_order_events
from sqlalchemy.orm import Session

router = APIRouter()


@router.get("/v1/orders/{order_id}/events", response_model=OrderEventListEnvelope)
def get_order_events(
    order_id: int,
    _staff: Principal = Depends(require_staff),
    db: Session = Depends(get_db),
) -> OrderEventListEnvelope:
    try:
        events = list_order_events(db, order_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e

    return OrderEventListEnvelope(count=len(events), data=events)
