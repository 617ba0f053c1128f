"""
Session extraction from authenticated user info.
"""

from typing import Any, Mapping, Optional

from .errors import AuthenticationError
from .rbac import SessionContext


def extract_session(user_info: Optional[Mapping[str, Any]]) -> SessionContext:
    """Build a SessionContext, rejecting user info without tenant, user id or role."""
    if not user_info:
        raise AuthenticationError()

    tenant_id = user_info.get("tenant_id")
    user_id = user_info.get("user_id") or user_info.get("id")
    role = user_info.get("role")
    if not tenant_id or not user_id or not role:
        raise AuthenticationError()

    return SessionContext(tenant_id=tenant_id, user_id=user_id, role=role)
