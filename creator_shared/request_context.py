"""
Request and tenant correlation ids carried on HTTP headers.
"""

import uuid
from dataclasses import dataclass
from typing import Mapping, Optional

from fastapi import Request

REQUEST_ID_HEADER = "x-request-id"
TENANT_ID_HEADER = "x-tenant-id"


@dataclass
class RequestContext:
    """Correlation ids for a single request."""
    request_id: Optional[str] = None
    tenant_id: Optional[str] = None


def resolve_request_id(headers: Mapping[str, str]) -> str:
    """Incoming request id, or a new one."""
    return headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())


def get_request_context(request: Request) -> RequestContext:
    """Read correlation ids set by the middleware, falling back to raw headers."""
    request_id = getattr(request.state, "request_id", None) or request.headers.get(REQUEST_ID_HEADER)
    tenant_id = getattr(request.state, "tenant_id", None) or request.headers.get(TENANT_ID_HEADER)
    return RequestContext(request_id=request_id, tenant_id=tenant_id)
