"""
Shared error handling for the Creator platform.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel

from .logging import request_id_var


class ErrorResponse(BaseModel):
    """Standard error response format."""

    request_id: Optional[str] = None
    code: str
    message: str
    details: Dict[str, Any] = {}


class AppError(Exception):
    """Base exception for Creator platform services."""

    status_code = 400

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            request_id=request_id_var.get(),
            code=self.code,
            message=self.message,
            details=self.details
        )


class AuthenticationError(AppError):
    """Missing or incomplete session."""

    status_code = 401

    def __init__(self, message: str = "unauthorized", details: Optional[Dict[str, Any]] = None):
        super().__init__("UNAUTHORIZED", message, details)


class ForbiddenError(AppError):
    """Session role is not allowed to perform the action."""

    status_code = 403

    def __init__(self, message: str = "forbidden", details: Optional[Dict[str, Any]] = None):
        super().__init__("FORBIDDEN", message, details)


class TenantRequiredError(AppError):
    """Session carries no tenant identifier."""

    status_code = 400

    def __init__(self, message: str = "tenant required", details: Optional[Dict[str, Any]] = None):
        super().__init__("TENANT_REQUIRED", message, details)


class ConfigurationError(AppError):
    """Invalid or incomplete configuration."""

    status_code = 500

    def __init__(self, message: str = "Invalid configuration", details: Optional[Dict[str, Any]] = None):
        super().__init__("CONFIGURATION_ERROR", message, details)
