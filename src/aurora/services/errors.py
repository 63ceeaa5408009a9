"""Domain errors raised by Aurora services.

Every error carries the user-visible message and the HTTP status it maps to;
``aurora.main`` turns them into ``{"detail": message}`` responses.
"""

from __future__ import annotations


class AuroraError(RuntimeError):
    """Base exception for all domain failures."""

    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationFailed(AuroraError):
    """Malformed or out-of-range input; only the first violated rule is reported."""


class ReferenceIntegrityError(AuroraError):
    """A referenced user, category, post or comment does not exist.

    The message is deliberately generic and does not say which reference
    was missing.
    """

    @classmethod
    def while_doing(cls, action: str) -> ReferenceIntegrityError:
        """Build the generic ``Error while <action>. Please try again`` failure."""
        return cls(f"Error while {action}. Please try again")


class BusinessRuleError(AuroraError):
    """A specific rule was broken (self-follow, reserved name, bad media)."""


class NotFoundError(AuroraError):
    """A slug lookup did not match anything."""

    status_code = 404


class PermissionDeniedError(AuroraError):
    """The authenticated user may not act on the requested resource."""

    status_code = 403


class AuthenticationError(AuroraError):
    """Missing, invalid or expired credentials."""

    status_code = 401
