from __future__ import annotations


class OrderingError(Exception):
    """Base class for ordering workflow errors."""

    status_code = 500


class ValidationError(OrderingError):
    """Malformed request shape, bad quantity, or bad status value."""

    status_code = 400


class NotFoundError(OrderingError):
    status_code = 404


class UnavailableError(OrderingError):
    status_code = 400

    def __init__(self, item_names: list[str]) -> None:
        super().__init__(f"Item(s) not available: {', '.join(item_names)}")
        self.item_names = item_names


class AuthorizationError(OrderingError):
    status_code = 403


class StorageError(OrderingError):
    """A transaction failed and was rolled back."""

    status_code = 500
