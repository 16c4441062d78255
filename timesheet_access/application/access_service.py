"""Access checks for report and data requests. Every decision leaves an audit record."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from timesheet_access.application.exceptions import StoreUnavailableError
from timesheet_access.domain.models.access import AccessDecision, DenialReason
from timesheet_access.governance.audit_logger import AuditLogger
from timesheet_access.governance.audit_models import AuditAction
from timesheet_access.security.access_validator import AccessValidator
from timesheet_access.security.rbac import Role

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccessCheckResult:
    decision: AccessDecision
    sanitized: Dict[str, str] = field(default_factory=dict)


class AccessService:
    """
    Sanitizes untrusted parameters, asks the validator for a decision, audits it.
    Invalid parameters deny before any store is touched.
    """

    def __init__(self, access_validator: AccessValidator, audit_logger: AuditLogger) -> None:
        self._validator = access_validator
        self._audit = audit_logger

    async def check_access(
        self,
        *,
        actor_id: str,
        role: "Role | str | None",
        tenant_id: str,
        params: Optional[Mapping[str, Any]] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
        correlation_id: Optional[str] = None,
    ) -> AccessCheckResult:
        validation = self._validator.sanitize_parameters(params or {})
        if not validation.valid:
            decision = AccessDecision.deny(DenialReason.INVALID_PARAMETER, validation.error or "")
            await self._record(
                decision, actor_id, role, tenant_id, None, ip_address, user_agent, correlation_id
            )
            return AccessCheckResult(decision=decision)

        sanitized = validation.sanitized
        requested_employee_id = sanitized.get("employee_id")
        try:
            decision = await self._validator.validate_access(
                actor_id,
                role,
                tenant_id,
                requested_employee_id=requested_employee_id,
                requested_scope=sanitized.get("scope"),
            )
        except Exception as e:
            logger.error("access_check_failed", extra={"error": str(e)})
            await self._audit.log_action(
                actor_id=actor_id,
                tenant_id=tenant_id,
                action=AuditAction.ACCESS_DENIED,
                resource_type="employee_data",
                resource_id=requested_employee_id,
                new_values={
                    "allowed": False,
                    "error": StoreUnavailableError.code,
                    "role": role.value if isinstance(role, Role) else role,
                },
                ip_address=ip_address,
                user_agent=user_agent,
                correlation_id=correlation_id,
            )
            raise StoreUnavailableError(f"Access check failed: {e}") from e

        await self._record(
            decision,
            actor_id,
            role,
            tenant_id,
            requested_employee_id,
            ip_address,
            user_agent,
            correlation_id,
        )
        return AccessCheckResult(decision=decision, sanitized=sanitized if decision.allowed else {})

    async def _record(
        self,
        decision: AccessDecision,
        actor_id: str,
        role,
        tenant_id: str,
        requested_employee_id: Optional[str],
        ip_address: Optional[str],
        user_agent: Optional[str],
        correlation_id: Optional[str],
    ) -> None:
        new_values = decision.to_dict()
        new_values["role"] = role.value if isinstance(role, Role) else role
        await self._audit.log_action(
            actor_id=actor_id,
            tenant_id=tenant_id,
            action=AuditAction.ACCESS_GRANTED if decision.allowed else AuditAction.ACCESS_DENIED,
            resource_type="employee_data",
            resource_id=requested_employee_id or decision.resolved_employee_id,
            new_values=new_values,
            ip_address=ip_address,
            user_agent=user_agent,
            correlation_id=correlation_id,
        )
