"""
core/access.py – Roles, Principal and permission checks.
Responsibility: decide allow/deny ONLY – no token parsing, no storage.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from .errors import Forbidden


class Role(str, Enum):
    STUDENT = "student"
    STAFF   = "staff"
    ADMIN   = "admin"


ANY_ROLE       = frozenset(Role)
STUDENT_ONLY   = frozenset({Role.STUDENT})
STAFF_OR_ADMIN = frozenset({Role.STAFF, Role.ADMIN})
ADMIN_ONLY     = frozenset({Role.ADMIN})


@dataclass(frozen=True)
class Principal:
    """Identity decoded from a valid bearer credential."""
    user_id: str
    role: Role
    canteen_id: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    @property
    def is_staff(self) -> bool:
        return self.role is Role.STAFF


def require_role(principal: Principal, allowed: Iterable[Role]) -> None:
    if principal.role not in set(allowed):
        raise Forbidden("Forbidden")


def ensure_canteen_access(principal: Principal, canteen_id: Optional[str], message: str) -> None:
    """Staff may only touch their own canteen; admins pass everywhere."""
    if principal.is_staff and principal.canteen_id != canteen_id:
        raise Forbidden(message)


def canteen_scope(principal: Principal) -> Optional[str]:
    """Canteen a principal's listings are restricted to, None = all canteens (admin only)."""
    return None if principal.is_admin else principal.canteen_id


def sees_no_orders(principal: Principal) -> bool:
    """Staff without an assigned canteen own no canteen's orders."""
    return principal.is_staff and principal.canteen_id is None
