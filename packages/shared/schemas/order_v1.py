"""Shared order schema (v1).

Status values are rendered by the customer order history and the staff dashboard.
They should remain stable and backwards compatible once shipped.
"""

from __future__ import annotations

from enum import Enum


class OrderStatusV1(str, Enum):
    RECEIVED = "received"
    PREPARING = "preparing"
    READY = "ready"
    COMPLETED = "completed"

    # Display-only. Nothing transitions an order into this state yet.
    CANCELLED = "cancelled"


class UserRoleV1(str, Enum):
    CUSTOMER = "customer"
    STAFF = "staff"
    ADMIN = "admin"
