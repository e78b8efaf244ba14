"""
Domain exceptions and standardized error responses for the journal service.

Service code raises the exceptions defined here; the handlers registered by
``register_exception_handlers`` turn them into the common JSON envelope with
the request's correlation ID attached.

Usage:
    from selfsight.shared.errors import NotFoundError, register_exception_handlers

    # In service code:
    raise NotFoundError("Entry not found", resource_type="entry", resource_id=entry_id)

    # In main.py:
    register_exception_handlers(app)

Response format:
    {"error": {"code": "NOT_FOUND", "message": "...", "details": {...}, "correlation_id": "abc123"}}
"""

import logging
from enum import Enum
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

logger = logging.getLogger("SelfSight.Errors")


class ErrorCode(str, Enum):
    """Standard error codes used across the service."""

    # Client errors (4xx)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"

    # Server errors (5xx)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


class ErrorDetail(BaseModel):
    """Structured error detail model."""
    code: str
    message: str
    details: Optional[dict[str, Any]] = None
    correlation_id: Optional[str] = None


class ErrorResponse(BaseModel):
    """Standard error response wrapper."""
    error: ErrorDetail


# =============================================================================
# EXCEPTIONS
# =============================================================================

class SelfSightError(Exception):
    """Base class for errors that map onto an HTTP error response."""

    code = ErrorCode.INTERNAL_ERROR
    status_code = 500

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(SelfSightError):
    """Input rejected before any remote call was made."""

    code = ErrorCode.VALIDATION_ERROR
    status_code = 400


class AuthenticationError(SelfSightError):
    """No usable user session."""

    code = ErrorCode.UNAUTHORIZED
    status_code = 401

    def __init__(self, message: str = "Authentication required", details: Optional[dict[str, Any]] = None):
        super().__init__(message, details)


class NotFoundError(SelfSightError):
    code = ErrorCode.NOT_FOUND
    status_code = 404

    def __init__(
        self,
        message: str,
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
    ):
        details = {}
        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = resource_id
        super().__init__(message, details or None)


class StoreError(SelfSightError):
    """The remote journal store rejected or failed an operation."""

    code = ErrorCode.DATABASE_ERROR
    status_code = 502

    def __init__(self, message: str = "Database operation failed", operation: Optional[str] = None):
        super().__init__(message, {"operation": operation} if operation else None)


class FunctionInvocationError(SelfSightError):
    """A hosted server function or the LLM provider behind it failed."""

    code = ErrorCode.EXTERNAL_SERVICE_ERROR
    status_code = 502

    def __init__(
        self,
        message: str,
        function_name: Optional[str] = None,
        status_code: Optional[int] = None,
        quota_exceeded: bool = False,
    ):
        details: dict[str, Any] = {}
        if function_name:
            details["function"] = function_name
        if status_code is not None:
            details["upstream_status"] = status_code
        if quota_exceeded:
            details["quota_exceeded"] = True
        super().__init__(message, details or None)
        self.function_name = function_name
        self.upstream_status = status_code
        self.quota_exceeded = quota_exceeded


class ConfigurationError(SelfSightError):
    code = ErrorCode.CONFIGURATION_ERROR
    status_code = 500


# =============================================================================
# RESPONSE HELPERS
# =============================================================================

def get_correlation_id(request: Optional[Request] = None) -> Optional[str]:
    """Extract correlation ID from request state."""
    if request is None:
        return None
    return getattr(request.state, "correlation_id", None)


def error_response(
    code: ErrorCode,
    message: str,
    status_code: int,
    details: Optional[dict[str, Any]] = None,
    correlation_id: Optional[str] = None,
) -> JSONResponse:
    """
    Create a standardized JSON error response.

    Args:
        code: Error code from ErrorCode enum
        message: Human-readable error message
        status_code: HTTP status code
        details: Optional additional error details
        correlation_id: Request correlation ID for tracing

    Returns:
        JSONResponse with standardized error format
    """
    error_detail = ErrorDetail(
        code=code.value,
        message=message,
        details=details,
        correlation_id=correlation_id,
    )
    return JSONResponse(
        status_code=status_code,
        content={"error": error_detail.model_dump(exclude_none=True)},
    )


def validation_error(
    message: str,
    details: Optional[dict[str, Any]] = None,
    correlation_id: Optional[str] = None,
) -> JSONResponse:
    """Create a 400 validation error response."""
    return error_response(
        code=ErrorCode.VALIDATION_ERROR,
        message=message,
        status_code=400,
        details=details,
        correlation_id=correlation_id,
    )


def internal_error(
    message: str = "Internal server error",
    correlation_id: Optional[str] = None,
) -> JSONResponse:
    """
    Create a 500 internal error response.

    Note: Be careful not to expose sensitive internal details to clients.
    """
    return error_response(
        code=ErrorCode.INTERNAL_ERROR,
        message=message,
        status_code=500,
        correlation_id=correlation_id,
    )


# =============================================================================
# FASTAPI INTEGRATION
# =============================================================================

async def _handle_selfsight_error(request: Request, exc: SelfSightError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s: %s", exc.code.value, exc.message)
    else:
        logger.info("%s: %s", exc.code.value, exc.message)
    return error_response(
        code=exc.code,
        message=exc.message,
        status_code=exc.status_code,
        details=exc.details,
        correlation_id=get_correlation_id(request),
    )


async def _handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = {
        ".".join(str(part) for part in err.get("loc", ()) if part != "body"): err.get("msg")
        for err in exc.errors()
    }
    return validation_error(
        "Invalid request",
        details={"fields": fields},
        correlation_id=get_correlation_id(request),
    )


async def _handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return internal_error(correlation_id=get_correlation_id(request))


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error envelope handlers to the application."""
    app.add_exception_handler(SelfSightError, _handle_selfsight_error)
    app.add_exception_handler(RequestValidationError, _handle_request_validation)
    app.add_exception_handler(Exception, _handle_unexpected)
