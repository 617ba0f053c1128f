"""
Shared utilities for the Creator platform backend.

This package aggregates common building blocks consumed by all services:

- config: Service configuration via pydantic-settings
- logging: Structured logging with request/tenant correlation
- errors: Canonical error types and responses
- cache: Shared cache client with no-op fallback
- rbac / session: Role checks and session extraction
- request_context: Request and tenant id headers
- telemetry: Sentry error reporting with header and PII scrubbing
- base_service: FastAPI service scaffolding

Do not import from service_* packages into creator_shared/.
"""
