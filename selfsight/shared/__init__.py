"""
Shared utilities for the journal service.

- errors: domain exceptions and the JSON error envelope
- logging_config: structured logging setup
- correlation: request correlation IDs
- logging_utils: redaction helpers for private journal text
"""

from selfsight.shared.errors import (
    AuthenticationError,
    ConfigurationError,
    ErrorCode,
    FunctionInvocationError,
    NotFoundError,
    SelfSightError,
    StoreError,
    ValidationError,
)

__all__ = [
    "AuthenticationError",
    "ConfigurationError",
    "ErrorCode",
    "FunctionInvocationError",
    "NotFoundError",
    "SelfSightError",
    "StoreError",
    "ValidationError",
]
