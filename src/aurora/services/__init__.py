# src/aurora/services/__init__.py
"""Business logic services for the Aurora application."""

from .errors import (
    AuroraError,
    AuthenticationError,
    BusinessRuleError,
    NotFoundError,
    PermissionDeniedError,
    ReferenceIntegrityError,
    ValidationFailed,
)

__all__ = [
    "AuroraError",
    "AuthenticationError",
    "BusinessRuleError",
    "NotFoundError",
    "PermissionDeniedError",
    "ReferenceIntegrityError",
    "ValidationFailed",
]
