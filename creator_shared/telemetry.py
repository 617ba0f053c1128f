"""
Sentry error reporting for Creator platform services.
"""

from typing import Any, Dict, Optional

import sentry_sdk

SCRUBBED_HEADERS = {"cookie", "authorization"}
SCRUBBED_USER_FIELDS = ("ip_address", "email")

_initialized = False


def scrub_event(event: Dict[str, Any], hint: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Strip credentials and personal data from an event before it is sent."""
    user = event.get("user")
    if user:
        for field in SCRUBBED_USER_FIELDS:
            user.pop(field, None)

    headers = (event.get("request") or {}).get("headers")
    if headers:
        for name in list(headers):
            if name.lower() in SCRUBBED_HEADERS:
                del headers[name]

    return event


def configure_sentry(dsn: Optional[str], environment: str, traces_sample_rate: float = 0.2) -> bool:
    """Initialise Sentry once per process. Returns whether reporting is active."""
    global _initialized
    if not dsn:
        return False
    if _initialized:
        return True

    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        traces_sample_rate=traces_sample_rate,
        send_default_pii=False,
        before_send=scrub_event,
    )
    _initialized = True
    return True


def tag_request(request_id: Optional[str], tenant_id: Optional[str]) -> None:
    """Tag the current scope with correlation ids."""
    if request_id:
        sentry_sdk.set_tag("request_id", request_id)
    if tenant_id:
        sentry_sdk.set_tag("tenant_id", tenant_id)


def report_exception(exc: BaseException) -> None:
    """Send an exception handled by the service to Sentry."""
    sentry_sdk.capture_exception(exc)
