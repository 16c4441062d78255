"""Edit gate for timesheet entries: access check, admin bypass, period lock, justification rule."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from timesheet_access.domain.exceptions import InvalidParameterError
from timesheet_access.domain.models.access import AccessDecision
from timesheet_access.domain.models.period_lock import EffectiveLock
from timesheet_access.domain.validators.parameter_validator import is_employee_id, require_identifier
from timesheet_access.governance.audit_models import AuditAction
from timesheet_access.periods.exceptions import LockResolutionFailed
from timesheet_access.periods.lock_resolver import LockResolver
from timesheet_access.periods.months import PeriodInput, normalize_period_month
from timesheet_access.security.access_validator import AccessValidator
from timesheet_access.security.rbac import Role, parse_role

logger = logging.getLogger(__name__)

DEFAULT_JUSTIFICATION_MIN_LENGTH = 10


class EditIntent(str, Enum):
    UPDATE = "update"
    DELETE = "delete"


class EditError(str, Enum):
    INVALID_PARAMETER = "invalid-parameter"
    JUSTIFICATION_REQUIRED = "justification-required"
    LOCK_RESOLUTION_FAILED = "lock-resolution-failed"


_INTENT_AUDIT = {
    EditIntent.UPDATE: AuditAction.UPDATE,
    EditIntent.DELETE: AuditAction.DELETE,
}


@dataclass(frozen=True)
class EditAuthorization:
    """
    allowed with requires_audit naming the audit action the caller must record.
    error is an access DenialReason value or an EditError value when denied.
    """

    allowed: bool
    requires_audit: Optional[AuditAction] = None
    error: Optional[str] = None
    effective_lock: Optional[EffectiveLock] = None
    access: Optional[AccessDecision] = None

    def to_dict(self) -> dict:
        return {
            "allowed": self.allowed,
            "requires_audit": self.requires_audit.value if self.requires_audit else None,
            "error": self.error,
            "effective_lock": self.effective_lock.to_dict() if self.effective_lock else None,
        }


def _denied(error: str, **kwargs) -> EditAuthorization:
    return EditAuthorization(allowed=False, error=error, **kwargs)


class EditGate:
    """
    Linear decision procedure; every call re-reads scope and lock state.
      1. access check for the target employee (deny stops here)
      2. ADMIN bypasses period locks
      3. unlocked period: allow, audited as the caller's intent
      4. locked period: allow only with a trimmed justification of the minimum length,
         audited as manager_edit_closed_period
    """

    def __init__(
        self,
        access_validator: AccessValidator,
        lock_resolver: LockResolver,
        justification_min_length: int = DEFAULT_JUSTIFICATION_MIN_LENGTH,
    ) -> None:
        self._access = access_validator
        self._locks = lock_resolver
        self._justification_min_length = justification_min_length

    async def authorize_entry_edit(
        self,
        actor_id: str,
        role: "Role | str",
        tenant_id: str,
        timesheet_id: str,
        employee_id: str,
        period_month: PeriodInput,
        justification: Optional[str] = None,
        intent: EditIntent = EditIntent.UPDATE,
    ) -> EditAuthorization:
        try:
            intent = EditIntent(intent)
            require_identifier(timesheet_id, "timesheet_id")
            employee_id = require_identifier(employee_id, "employee_id")
            if not is_employee_id(employee_id):
                raise InvalidParameterError(f"employee_id '{employee_id}' is not a valid UUID")
            month = normalize_period_month(period_month)
        except (InvalidParameterError, ValueError) as e:
            logger.info("edit_rejected_invalid_parameter", extra={"error": str(e)})
            return _denied(EditError.INVALID_PARAMETER.value)

        decision = await self._access.validate_access(actor_id, role, tenant_id, employee_id)
        if not decision.allowed:
            return _denied(decision.reason.value if decision.reason else "access-denied", access=decision)

        if parse_role(role) is Role.ADMIN:
            return EditAuthorization(
                allowed=True, requires_audit=_INTENT_AUDIT[intent], access=decision
            )

        try:
            effective = await self._locks.resolve_effective_lock(tenant_id, employee_id, month)
        except LockResolutionFailed:
            return _denied(EditError.LOCK_RESOLUTION_FAILED.value, access=decision)

        if not effective.locked:
            return EditAuthorization(
                allowed=True,
                requires_audit=_INTENT_AUDIT[intent],
                effective_lock=effective,
                access=decision,
            )

        if len((justification or "").strip()) < self._justification_min_length:
            logger.info(
                "justification_required",
                extra={"employee_id": employee_id, "period_month": month.isoformat()},
            )
            return _denied(
                EditError.JUSTIFICATION_REQUIRED.value,
                effective_lock=effective,
                access=decision,
            )

        return EditAuthorization(
            allowed=True,
            requires_audit=AuditAction.MANAGER_EDIT_CLOSED_PERIOD,
            effective_lock=effective,
            access=decision,
        )
