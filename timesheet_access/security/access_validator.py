"""Role/target access decisions and untrusted-parameter sanitation. Does not log audit records."""

import logging
from typing import Any, Mapping, Optional

from timesheet_access.domain.models.access import AccessDecision, DenialReason
from timesheet_access.domain.models.period_lock import ScopeLevel
from timesheet_access.domain.models.report import ReportScope
from timesheet_access.domain.stores import EmployeeDirectory
from timesheet_access.domain.validators.parameter_validator import (
    ParameterValidationResult,
    sanitize_parameters,
)
from timesheet_access.security.exceptions import ScopeResolutionFailed
from timesheet_access.security.rbac import ADMIN_ROLES, MANAGER_ROLES, Role, parse_role
from timesheet_access.security.scope_resolver import ScopeResolver

logger = logging.getLogger(__name__)

_VALID_SCOPES = frozenset(s.value for s in ReportScope)


class AccessValidator:
    """
    Combines role, requested target and manager scope into an AccessDecision.
    Access outcomes are returned, never raised; only directory store errors propagate.
    The orchestrating handler is responsible for auditing every decision.
    """

    def __init__(self, scope_resolver: ScopeResolver, directory: EmployeeDirectory) -> None:
        self._scope_resolver = scope_resolver
        self._directory = directory

    def sanitize_parameters(self, raw_params: Mapping[str, Any]) -> ParameterValidationResult:
        return sanitize_parameters(raw_params)

    async def validate_access(
        self,
        actor_id: str,
        role: "Role | str | None",
        tenant_id: str,
        requested_employee_id: Optional[str] = None,
        requested_scope: Optional[str] = None,
    ) -> AccessDecision:
        if not actor_id or not str(actor_id).strip():
            return AccessDecision.deny(DenialReason.INVALID_PARAMETER, "actor_id must not be empty")
        if not tenant_id or not str(tenant_id).strip():
            return AccessDecision.deny(DenialReason.INVALID_PARAMETER, "tenant_id must not be empty")
        if requested_scope and requested_scope not in _VALID_SCOPES:
            return AccessDecision.deny(
                DenialReason.INVALID_PARAMETER, f"invalid report scope '{requested_scope}'"
            )
        requested_employee_id = requested_employee_id or None

        parsed = parse_role(role)
        if parsed is None:
            decision = AccessDecision.deny(
                DenialReason.UNAUTHORIZED_ROLE, f"role '{role}' is not authorized"
            )
        elif parsed is Role.USER:
            decision = await self._resolve_own_record(actor_id, tenant_id, requested_employee_id)
        elif parsed in MANAGER_ROLES:
            decision = await self._resolve_manager(actor_id, tenant_id, requested_employee_id)
        elif parsed in ADMIN_ROLES:
            decision = await self._resolve_admin(tenant_id, requested_employee_id)
        else:
            decision = AccessDecision.deny(
                DenialReason.UNAUTHORIZED_ROLE, f"role '{role}' is not authorized"
            )

        if not decision.allowed:
            logger.info(
                "access_denied",
                extra={
                    "actor_id": actor_id,
                    "role": str(role),
                    "requested_employee_id": requested_employee_id,
                    "reason": decision.reason.value if decision.reason else None,
                },
            )
        return decision

    async def _resolve_own_record(
        self, actor_id: str, tenant_id: str, requested_employee_id: Optional[str]
    ) -> AccessDecision:
        """Regular-user rule: the actor's own employee record is the only permitted target."""
        own_employee_id = await self._directory.get_employee_id_for_user(tenant_id, actor_id)
        if not own_employee_id:
            return AccessDecision.deny(
                DenialReason.NO_EMPLOYEE_PROFILE, "no employee record is linked to this user"
            )
        if requested_employee_id and requested_employee_id != own_employee_id:
            return AccessDecision.deny(
                DenialReason.CROSS_EMPLOYEE, "access to other employees' data is denied"
            )
        return AccessDecision.allow(employee_id=own_employee_id)

    async def _resolve_manager(
        self, actor_id: str, tenant_id: str, requested_employee_id: Optional[str]
    ) -> AccessDecision:
        try:
            scope = await self._scope_resolver.resolve_manager_scope(actor_id, tenant_id)
        except ScopeResolutionFailed as e:
            return AccessDecision.deny(DenialReason.SCOPE_RESOLUTION_FAILED, e.message)

        if not scope:
            # A manager without groups is an individual contributor here.
            return await self._resolve_own_record(actor_id, tenant_id, requested_employee_id)

        if requested_employee_id:
            if requested_employee_id not in scope:
                return AccessDecision.deny(
                    DenialReason.OUT_OF_SCOPE, "employee is outside the manager's groups"
                )
            return AccessDecision.allow(employee_id=requested_employee_id)
        return AccessDecision.allow(employee_set=scope)

    async def _resolve_admin(
        self, tenant_id: str, requested_employee_id: Optional[str]
    ) -> AccessDecision:
        if requested_employee_id:
            owner = await self._directory.get_entity_tenant(
                ScopeLevel.EMPLOYEE, requested_employee_id
            )
            if owner != tenant_id:
                return AccessDecision.deny(
                    DenialReason.CROSS_TENANT, "employee does not belong to this tenant"
                )
        return AccessDecision.allow(employee_id=requested_employee_id)
