from __future__ import annotations

from decimal import Decimal
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from httpx import Response
from packages.shared.schemas.order_v1 import OrderStatusV1
from services.api.app.db.models import Order
from services.api.app.services.errors import ValidationError
from services.api.app.services.order_status import (
    apply_status,
    is_transition_allowed,
    parse_settable_status,
    parse_status_filter,
)

STAFF = {"X-User-Id": "99", "X-User-Role": "admin"}
CUSTOMER = {"X-User-Id": "1", "X-User-Role": "customer"}


@pytest.fixture()
def client(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> TestClient:
    db_path = tmp_path / "canteen_status.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite+pysqlite:///{db_path}")
    monkeypatch.setenv("CANTEEN_DB_AUTO_CREATE", "true")

    from services.api.app.main import app

    with TestClient(app) as c:
        from services.api.app.db.database import db_session
        from services.api.app.db.models import MenuItem

        db = db_session()
        try:
            db.add(MenuItem(id=1, name="Masala Dosa", category="Breakfast", price=Decimal("50.00")))
            db.add(MenuItem(id=2, name="Veg Thali", category="Lunch", price=Decimal("120.00")))
            db.commit()
        finally:
            db.close()
        yield c


def _set_status(client: TestClient, order_id: int, status: object, headers: dict) -> Response:
    return client.put(f"/v1/orders/{order_id}/status", json={"status": status}, headers=headers)


def _place_order(client: TestClient) -> dict:
    resp = client.post(
        "/v1/orders",
        json={"items": [{"item_id": 1, "quantity": 2}, {"item_id": 2, "quantity": 1}]},
        headers=CUSTOMER,
    )
    assert resp.status_code == 201
    return resp.json()["data"]


def test_status_sequence_only_changes_status(client: TestClient) -> None:
    order = _place_order(client)

    for status in ("preparing", "ready", "completed"):
        resp = _set_status(client, order["id"], status, STAFF)
        assert resp.status_code == 200

        updated = resp.json()["data"]
        assert updated["status"] == status
        assert updated["total_amount"] == order["total_amount"]
        assert updated["items"] == order["items"]
        assert updated["created_at"] == order["created_at"]
        assert updated["updated_at"] >= order["created_at"]


def test_status_may_move_backwards(client: TestClient) -> None:
    order = _place_order(client)

    _set_status(client, order["id"], "completed", STAFF)
    resp = _set_status(client, order["id"], "received", STAFF)
    assert resp.status_code == 200
    assert resp.json()["data"]["status"] == "received"


@pytest.mark.parametrize("status", ["cancelled", "done", "", "READY", None, 3])
def test_status_rejects_values_outside_settable_set(client: TestClient, status: object) -> None:
    order = _place_order(client)

    resp = _set_status(client, order["id"], status, STAFF)
    assert resp.status_code == 400
    assert resp.json()["message"] == (
        "Invalid status. Must be one of: received, preparing, ready, completed"
    )


def test_status_unknown_order_is_404(client: TestClient) -> None:
    resp = client.put("/v1/orders/999/status", json={"status": "ready"}, headers=STAFF)
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "message": "Order not found"}


def test_status_update_requires_staff(client: TestClient) -> None:
    order = _place_order(client)

    resp = _set_status(client, order["id"], "ready", CUSTOMER)
    assert resp.status_code == 403

    fetched = client.get(f"/v1/orders/{order['id']}", headers=CUSTOMER).json()["data"]
    assert fetched["status"] == "received"


def test_status_changes_are_recorded_as_events(client: TestClient) -> None:
    order = _place_order(client)
    _set_status(client, order["id"], "preparing", STAFF)

    resp = client.get(f"/v1/orders/{order['id']}/events", headers=STAFF)
    assert resp.status_code == 200

    events = resp.json()["data"]
    assert [e["event_type"] for e in events] == ["ORDER_CREATED", "ORDER_STATUS_CHANGED"]
    assert events[0]["payload"]["total_amount"] == "220.00"
    assert events[1]["payload"] == {"from": "received", "to": "preparing"}
    assert events[1]["user_id"] == 99


def test_events_for_unknown_order_is_404(client: TestClient) -> None:
    resp = client.get("/v1/orders/12345/events", headers=STAFF)
    assert resp.status_code == 404


def test_parse_settable_status() -> None:
    assert parse_settable_status("ready") is OrderStatusV1.READY
    with pytest.raises(ValidationError):
        parse_settable_status("cancelled")


def test_parse_status_filter_accepts_display_statuses() -> None:
    assert parse_status_filter(None) is None
    assert parse_status_filter("cancelled") is OrderStatusV1.CANCELLED
    with pytest.raises(ValidationError):
        parse_status_filter("bogus")


def test_any_to_any_transition_is_allowed() -> None:
    for current in ("received", "preparing", "ready", "completed"):
        assert is_transition_allowed(current, OrderStatusV1.RECEIVED)
        assert is_transition_allowed(current, OrderStatusV1.COMPLETED)
    assert not is_transition_allowed("received", OrderStatusV1.CANCELLED)


def test_apply_status_returns_previous_and_leaves_total() -> None:
    order = Order(id=1, user_id=1, total_amount=Decimal("10.00"), status="received")

    previous = apply_status(order, OrderStatusV1.READY)

    assert previous == "received"
    assert order.status == "ready"
    assert order.total_amount == Decimal("10.00")
    assert order.updated_at is not None
