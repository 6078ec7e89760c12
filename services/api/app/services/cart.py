"""Client-side cart model for ordering clients; the API service does not import it.

``Cart`` is an immutable value and every transition is a pure function returning a new one.
``CartStore`` holds the current cart for a single client session; callers are handed a
store instance rather than reaching for shared module state.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal

from services.api.app.services.pricing import to_money


@dataclass(frozen=True, slots=True)
class CartLine:
    item_id: int
    name: str
    unit_price: Decimal
    quantity: int


@dataclass(frozen=True, slots=True)
class Cart:
    lines: tuple[CartLine, ...] = ()


def add_item(cart: Cart, item_id: int, name: str, unit_price: Decimal, quantity: int = 1) -> Cart:
    if quantity <= 0:
        return cart

    for idx, line in enumerate(cart.lines):
        if line.item_id == item_id:
            bumped = replace(line, quantity=line.quantity + quantity)
            return Cart(lines=cart.lines[:idx] + (bumped,) + cart.lines[idx + 1 :])

    line = CartLine(item_id=item_id, name=name, unit_price=to_money(unit_price), quantity=quantity)
    return Cart(lines=cart.lines + (line,))


def remove_item(cart: Cart, item_id: int) -> Cart:
    return Cart(lines=tuple(line for line in cart.lines if line.item_id != item_id))


def set_quantity(cart: Cart, item_id: int, quantity: int) -> Cart:
    if quantity <= 0:
        return remove_item(cart, item_id)

    return Cart(
        lines=tuple(
            replace(line, quantity=quantity) if line.item_id == item_id else line
            for line in cart.lines
        )
    )


def clear(cart: Cart) -> Cart:
    del cart
    return Cart()


def cart_total(cart: Cart) -> Decimal:
    return to_money(sum((line.unit_price * line.quantity for line in cart.lines), Decimal("0")))


def item_count(cart: Cart) -> int:
    return sum(line.quantity for line in cart.lines)


def to_order_items(cart: Cart) -> list[dict[str, int]]:
    """Body of ``POST /v1/orders``. Prices stay behind; the server reprices."""

    return [{"item_id": line.item_id, "quantity": line.quantity} for line in cart.lines]


class CartStore:
    def __init__(self, cart: Cart | None = None) -> None:
        self._cart = cart or Cart()

    @property
    def cart(self) -> Cart:
        return self._cart

    def add(self, item_id: int, name: str, unit_price: Decimal, quantity: int = 1) -> Cart:
        self._cart = add_item(self._cart, item_id, name, unit_price, quantity)
        return self._cart

    def remove(self, item_id: int) -> Cart:
        self._cart = remove_item(self._cart, item_id)
        return self._cart

    def set_quantity(self, item_id: int, quantity: int) -> Cart:
        self._cart = set_quantity(self._cart, item_id, quantity)
        return self._cart

    def clear(self) -> Cart:
        self._cart = clear(self._cart)
        return self._cart

    def total(self) -> Decimal:
        return cart_total(self._cart)

    def item_count(self) -> int:
        return item_count(self._cart)

    def order_items(self) -> list[dict[str, int]]:
        return to_order_items(self._cart)
