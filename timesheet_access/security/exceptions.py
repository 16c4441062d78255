"""Security-layer exceptions. Typed, no HTTP."""

from typing import FrozenSet


class SecurityError(Exception):
    """Base for all security-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class AuthorizationError(SecurityError):
    """Raised when role does not have permission for the action."""


class TenantIsolationError(SecurityError):
    """Raised when resource tenant does not match request tenant (cross-tenant access)."""


class ScopeResolutionFailed(SecurityError):
    """
    Raised when the manager scope cannot be computed (store error or tenant breach).
    The scope to act on is always empty: callers must never widen it.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.scope: FrozenSet[str] = frozenset()
