from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

import pytest
from services.api.app.db.models import MenuItem
from services.api.app.services.errors import NotFoundError, UnavailableError, ValidationError
from services.api.app.services.pricing import (
    MAX_STORED_INT,
    PricedLine,
    parse_requested_lines,
    price_order,
    to_money,
)


class _FakeCatalog:
    def __init__(self, items: list[MenuItem]) -> None:
        self._items = {i.id: i for i in items}
        self.lookups: list[set[int]] = []

    def lookup_many(self, item_ids: Iterable[int]) -> list[MenuItem]:
        ids = set(item_ids)
        self.lookups.append(ids)
        return [self._items[i] for i in ids if i in self._items]


def _item(item_id: int, name: str, price: str, available: bool = True) -> MenuItem:
    return MenuItem(
        id=item_id, name=name, category="Menu", price=Decimal(price), available=available
    )


def _catalog() -> _FakeCatalog:
    return _FakeCatalog(
        [
            _item(1, "Masala Dosa", "50.00"),
            _item(2, "Veg Thali", "120.00"),
            _item(3, "Paneer Wrap", "70.00", available=False),
            _item(4, "Lassi", "35.00", available=False),
            _item(5, "Chai", "0.10"),
        ]
    )


def test_price_order_concrete_scenario() -> None:
    priced = price_order(_catalog(), [{"item_id": 1, "quantity": 2}, {"item_id": 2, "quantity": 1}])

    assert priced.total == Decimal("220.00")
    assert priced.lines == [
        PricedLine(item_id=1, quantity=2, unit_price=Decimal("50.00")),
        PricedLine(item_id=2, quantity=1, unit_price=Decimal("120.00")),
    ]


def test_price_order_uses_exact_decimal_arithmetic() -> None:
    priced = price_order(_catalog(), [{"item_id": 5, "quantity": 3}])
    assert priced.total == Decimal("0.30")


def test_price_order_looks_up_distinct_ids_once() -> None:
    catalog = _catalog()
    price_order(catalog, [{"item_id": 1, "quantity": 1}, {"item_id": 1, "quantity": 4}])
    assert catalog.lookups == [{1}]


def test_price_order_missing_item_message_is_vague() -> None:
    with pytest.raises(NotFoundError) as exc:
        price_order(_catalog(), [{"item_id": 1, "quantity": 1}, {"item_id": 77, "quantity": 1}])
    assert str(exc.value) == "One or more menu items not found"


def test_price_order_names_every_unavailable_item() -> None:
    with pytest.raises(UnavailableError) as exc:
        price_order(
            _catalog(),
            [
                {"item_id": 4, "quantity": 1},
                {"item_id": 1, "quantity": 1},
                {"item_id": 3, "quantity": 1},
            ],
        )
    assert str(exc.value) == "Item(s) not available: Paneer Wrap, Lassi"
    assert exc.value.item_names == ["Paneer Wrap", "Lassi"]


@pytest.mark.parametrize(
    "raw",
    [
        None,
        [],
        {"item_id": 1, "quantity": 1},
        [1, 2],
        [{"item_id": 1, "quantity": "2"}],
        [{"item_id": True, "quantity": 1}],
        [{"item_id": 1, "quantity": 1.5}],
        [{"item_id": 1, "quantity": 0}],
    ],
)
def test_parse_requested_lines_rejects_bad_shapes(raw: object) -> None:
    with pytest.raises(ValidationError):
        parse_requested_lines(raw)


def test_to_money_rounds_half_up() -> None:
    assert to_money(Decimal("1.005")) == Decimal("1.01")
    assert to_money(3) == Decimal("3.00")


@pytest.mark.parametrize(
    ("raw", "message"),
    [
        ([{"item_id": 1, "quantity": 10**20}], "Quantity is too large"),
        ([{"item_id": 10**20, "quantity": 1}], "item_id is out of range"),
        ([{"item_id": -(10**20), "quantity": 1}], "item_id is out of range"),
    ],
)
def test_parse_requested_lines_rejects_values_beyond_stored_range(
    raw: object,
    message: str,
) -> None:
    with pytest.raises(ValidationError, match=message):
        parse_requested_lines(raw)


def test_parse_requested_lines_accepts_largest_stored_int() -> None:
    lines = parse_requested_lines([{"item_id": MAX_STORED_INT, "quantity": MAX_STORED_INT}])
    assert lines[0].item_id == MAX_STORED_INT
