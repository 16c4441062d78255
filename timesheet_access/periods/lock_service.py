"""Administration of period lock records. Write side of the lock store; every change is audited."""

import logging
from typing import List, Optional

from timesheet_access.domain.exceptions import InvalidParameterError
from timesheet_access.domain.models.period_lock import PeriodLock, ScopeLevel
from timesheet_access.domain.stores import EmployeeDirectory, LockOverrideStore
from timesheet_access.domain.validators.parameter_validator import (
    require_identifier,
    validate_tenant_id,
)
from timesheet_access.governance.audit_logger import AuditLogger
from timesheet_access.governance.audit_models import AuditAction
from timesheet_access.periods.months import PeriodInput, normalize_period_month
from timesheet_access.security.rbac import RBACService, Role
from timesheet_access.security.tenant_context import TenantContext

logger = logging.getLogger(__name__)


def parse_scope_level(value: "ScopeLevel | str") -> ScopeLevel:
    try:
        return ScopeLevel(value)
    except ValueError as e:
        raise InvalidParameterError(f"invalid scope level '{value}'") from e


def _lock_values(lock: Optional[PeriodLock]) -> Optional[dict]:
    if lock is None:
        return None
    return {"locked": lock.locked, "reason": lock.reason}


class PeriodLockService:
    """
    Creates or replaces lock records for tenant/operations administrators.
    A lock's scope entity must belong to the lock's tenant. Last write wins.
    """

    def __init__(
        self,
        lock_store: LockOverrideStore,
        directory: EmployeeDirectory,
        audit_logger: AuditLogger,
        rbac: RBACService,
    ) -> None:
        self._store = lock_store
        self._directory = directory
        self._audit = audit_logger
        self._rbac = rbac

    async def set_lock(
        self,
        *,
        actor_id: str,
        role: "Role | str",
        tenant_id: str,
        scope_level: "ScopeLevel | str",
        period_month: PeriodInput,
        locked: bool,
        scope_id: Optional[str] = None,
        reason: Optional[str] = None,
        correlation_id: Optional[str] = None,
    ) -> PeriodLock:
        """
        Upsert the lock keyed by (tenant, level, scope id, month).
        Raises AuthorizationError, InvalidParameterError or TenantIsolationError.
        """
        self._rbac.check_permission(role, "manage_locks")
        validate_tenant_id(tenant_id)
        level = parse_scope_level(scope_level)
        month = normalize_period_month(period_month)

        if level is ScopeLevel.TENANT:
            if scope_id and scope_id != tenant_id:
                TenantContext.validate_access(scope_id, tenant_id)
            scope_id = tenant_id
        else:
            scope_id = require_identifier(scope_id, "scope_id")
            owner = await self._directory.get_entity_tenant(level, scope_id)
            TenantContext.ensure_entity_in_tenant(owner, tenant_id, f"{level.value} '{scope_id}'")

        reason = reason.strip() if reason and reason.strip() else None
        previous = await self._store.get_override(tenant_id, level, scope_id, month)
        saved = await self._store.save_override(
            PeriodLock(
                tenant_id=tenant_id,
                scope_level=level,
                scope_id=scope_id,
                period_month=month,
                locked=locked,
                reason=reason,
            )
        )
        logger.info(
            "period_lock_set",
            extra={
                "scope_level": level.value,
                "scope_id": scope_id,
                "period_month": month.isoformat(),
                "locked": locked,
            },
        )
        await self._audit.log_action(
            actor_id=actor_id,
            tenant_id=tenant_id,
            action=AuditAction.PERIOD_LOCK_SET,
            resource_type="period_lock",
            resource_id=f"{level.value}:{scope_id}:{month.isoformat()}",
            old_values=_lock_values(previous),
            new_values=_lock_values(saved),
            correlation_id=correlation_id,
        )
        return saved

    async def list_locks(
        self,
        *,
        role: "Role | str",
        tenant_id: str,
        scope_level: "ScopeLevel | str | None" = None,
        period_month: Optional[PeriodInput] = None,
    ) -> List[PeriodLock]:
        """Lock records of one tenant, newest month first."""
        self._rbac.check_permission(role, "manage_locks")
        validate_tenant_id(tenant_id)
        level = parse_scope_level(scope_level) if scope_level else None
        month = normalize_period_month(period_month) if period_month else None
        locks = await self._store.list_overrides(tenant_id, level, month)
        locks = TenantContext.ensure_same_tenant(locks, tenant_id)
        return sorted(
            locks,
            key=lambda lock: (lock.period_month, lock.scope_level.value, lock.scope_id),
            reverse=True,
        )
