"""
Role-based permission checks for tenant sessions.
"""

from enum import Enum
from typing import Iterable, Optional, Union

from pydantic import BaseModel

from .errors import ForbiddenError, TenantRequiredError


class Role(str, Enum):
    """Session roles."""

    BRAND_ADMIN = "brand_admin"
    OPS_ADMIN = "ops_admin"
    BRAND_MEMBER = "brand_member"
    CREATOR = "creator"
    FAN = "fan"


ROLE_HIERARCHY = {
    Role.BRAND_ADMIN: 5,
    Role.OPS_ADMIN: 4,
    Role.BRAND_MEMBER: 3,
    Role.CREATOR: 2,
    Role.FAN: 1,
}


class SessionContext(BaseModel):
    """Request-scoped identity: tenant, user and role."""

    tenant_id: Optional[str] = None
    user_id: str
    role: str


def _value(role: Union[Role, str]) -> str:
    return role.value if isinstance(role, Role) else role


def role_rank(role: Union[Role, str]) -> int:
    """Rank of ``role``; 0 for roles outside the hierarchy."""
    try:
        return ROLE_HIERARCHY[Role(_value(role))]
    except ValueError:
        return 0


def assert_role(session: SessionContext, allowed: Iterable[Union[Role, str]]) -> None:
    """Raise ForbiddenError unless the session role is one of ``allowed``."""
    role = _value(session.role)
    if role not in {_value(r) for r in allowed}:
        raise ForbiddenError(details={"role": role})


def require_tenant(session: SessionContext) -> None:
    """Raise TenantRequiredError when the session has no tenant."""
    if not session.tenant_id:
        raise TenantRequiredError()


def can_act(session: SessionContext, minimum: Union[Role, str]) -> bool:
    """Whether the session role ranks at or above ``minimum``."""
    current = role_rank(session.role)
    required = role_rank(minimum)
    if not current or not required:
        return False
    return current >= required
