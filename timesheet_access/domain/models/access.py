"""Access decisions. Ephemeral: logged through the audit trail, never persisted as entities."""

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional


class DenialReason(str, Enum):
    CROSS_EMPLOYEE = "cross-employee"
    OUT_OF_SCOPE = "out-of-scope"
    UNAUTHORIZED_ROLE = "unauthorized-role"
    INVALID_PARAMETER = "invalid-parameter"
    NO_EMPLOYEE_PROFILE = "no-employee-profile"
    CROSS_TENANT = "cross-tenant"
    SCOPE_RESOLUTION_FAILED = "scope-resolution-failed"


@dataclass(frozen=True)
class AccessDecision:
    """
    Outcome of an access check.
    resolved_employee_id is set for single-target decisions; resolved_employee_set for
    manager listings. An empty set with allowed=False means nothing is visible.
    """

    allowed: bool
    reason: Optional[DenialReason] = None
    resolved_employee_id: Optional[str] = None
    resolved_employee_set: Optional[FrozenSet[str]] = None
    message: Optional[str] = None

    @classmethod
    def allow(
        cls,
        *,
        employee_id: Optional[str] = None,
        employee_set: Optional[FrozenSet[str]] = None,
    ) -> "AccessDecision":
        return cls(
            allowed=True,
            resolved_employee_id=employee_id,
            resolved_employee_set=employee_set,
        )

    @classmethod
    def deny(cls, reason: DenialReason, message: str) -> "AccessDecision":
        return cls(
            allowed=False,
            reason=reason,
            resolved_employee_set=frozenset(),
            message=message,
        )

    def to_dict(self) -> dict:
        return {
            "allowed": self.allowed,
            "reason": self.reason.value if self.reason else None,
            "resolved_employee_id": self.resolved_employee_id,
            "resolved_employee_set": (
                sorted(self.resolved_employee_set)
                if self.resolved_employee_set is not None
                else None
            ),
            "message": self.message,
        }
