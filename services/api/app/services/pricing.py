"""Validate a requested cart and price it against the menu catalog.

Client-supplied prices are never read. Unit prices come from the catalog at call time and
all arithmetic is done on ``Decimal``.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from services.api.app.services.catalog import MenuCatalog
from services.api.app.services.errors import NotFoundError, UnavailableError, ValidationError

CENTS = Decimal("0.01")

# Ids and quantities are stored in signed 64-bit integer columns.
MAX_STORED_INT = 2**63 - 1


def to_money(value: Decimal | int | str) -> Decimal:
    return Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


@dataclass(frozen=True, slots=True)
class RequestedLine:
    item_id: int
    quantity: int


@dataclass(frozen=True, slots=True)
class PricedLine:
    item_id: int
    quantity: int
    unit_price: Decimal

    @property
    def line_total(self) -> Decimal:
        return to_money(self.unit_price * self.quantity)


@dataclass(frozen=True, slots=True)
class PricedOrder:
    lines: list[PricedLine]
    total: Decimal


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def parse_requested_lines(raw_items: Any) -> list[RequestedLine]:
    if not isinstance(raw_items, list) or not raw_items:
        raise ValidationError("Please provide items array with at least one item")

    lines: list[RequestedLine] = []
    for raw in raw_items:
        if not isinstance(raw, dict):
            raise ValidationError("Each item must have item_id and quantity")

        item_id = raw.get("item_id")
        quantity = raw.get("quantity")
        if item_id is None or quantity is None:
            raise ValidationError("Each item must have item_id and quantity")
        if not _is_int(item_id) or not _is_int(quantity):
            raise ValidationError("item_id and quantity must be integers")
        if quantity <= 0:
            raise ValidationError("Quantity must be greater than 0")
        if quantity > MAX_STORED_INT:
            raise ValidationError("Quantity is too large")
        if abs(item_id) > MAX_STORED_INT:
            raise ValidationError("item_id is out of range")

        lines.append(RequestedLine(item_id=item_id, quantity=quantity))

    return lines


def price_lines(catalog: MenuCatalog, lines: list[RequestedLine]) -> PricedOrder:
    requested_ids = {line.item_id for line in lines}
    menu_items = {item.id: item for item in catalog.lookup_many(requested_ids)}

    # Deliberately vague: do not reveal which ids are missing.
    if len(menu_items) < len(requested_ids):
        raise NotFoundError("One or more menu items not found")

    unavailable = [
        menu_items[item_id].name
        for item_id in sorted(requested_ids)
        if not menu_items[item_id].available
    ]
    if unavailable:
        raise UnavailableError(unavailable)

    priced: list[PricedLine] = []
    total = Decimal("0")
    for line in lines:
        unit_price = to_money(menu_items[line.item_id].price)
        priced_line = PricedLine(
            item_id=line.item_id,
            quantity=line.quantity,
            unit_price=unit_price,
        )
        total += priced_line.line_total
        priced.append(priced_line)

    return PricedOrder(lines=priced, total=to_money(total))


def price_order(catalog: MenuCatalog, raw_items: Any) -> PricedOrder:
    return price_lines(catalog, parse_requested_lines(raw_items))
