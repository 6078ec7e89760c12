"""Request principal resolution.

Authentication lives in front of this service. The gateway forwards the authenticated
user's id and role as ``X-User-Id`` / ``X-User-Role`` headers.
"""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Depends, Header, HTTPException
from packages.shared.schemas.order_v1 import UserRoleV1

STAFF_ROLES = frozenset({UserRoleV1.STAFF.value, UserRoleV1.ADMIN.value})


@dataclass(frozen=True, slots=True)
class Principal:
    id: int
    role: str

    @property
    def is_staff(self) -> bool:
        return self.role in STAFF_ROLES


def get_current_principal(
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> Principal:
    if not x_user_id:
        raise HTTPException(
            status_code=401, detail="Not authorized to access this route. Please login."
        )

    try:
        user_id = int(x_user_id)
    except ValueError as e:
        raise HTTPException(status_code=401, detail="Invalid user identity") from e

    role = (x_user_role or UserRoleV1.CUSTOMER.value).strip().lower()
    return Principal(id=user_id, role=role)


def require_staff(principal: Principal = Depends(get_current_principal)) -> Principal:
    if not principal.is_staff:
        raise HTTPException(
            status_code=403,
            detail=f"User role {principal.role} is not authorized to access this route",
        )
    return principal
