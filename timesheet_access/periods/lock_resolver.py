"""Effective period lock for an (employee, period-month) pair across the four scope levels."""

import logging
from typing import Iterable, Optional

from timesheet_access.domain.models.period_lock import (
    EffectiveLock,
    LockSource,
    PeriodLock,
    ScopeLevel,
)
from timesheet_access.domain.stores import GroupMembershipStore, LockOverrideStore
from timesheet_access.domain.validators.parameter_validator import require_identifier
from timesheet_access.periods.exceptions import LockResolutionFailed
from timesheet_access.periods.months import PeriodInput, normalize_period_month
from timesheet_access.security.exceptions import TenantIsolationError
from timesheet_access.security.tenant_context import TenantContext

logger = logging.getLogger(__name__)


def _combine(records: Iterable[Optional[PeriodLock]], source: LockSource) -> Optional[EffectiveLock]:
    """
    Conservative union for levels where an employee may match several records
    (several groups, several environments): any locked record closes the period.
    The reason comes from the first locked record in scope-id order.
    """
    present = sorted((r for r in records if r is not None), key=lambda r: r.scope_id)
    if not present:
        return None
    locked = [r for r in present if r.locked]
    if locked:
        return EffectiveLock(locked=True, source_level=source, reason=locked[0].reason)
    return EffectiveLock(locked=False, source_level=source, reason=None)


class LockResolver:
    """
    Precedence, most specific wins: employee > group > environment > tenant.
    No record at any level resolves to unlocked (source none). Results are never cached
    across calls; lock state may change between requests.
    """

    def __init__(
        self,
        membership_store: GroupMembershipStore,
        lock_store: LockOverrideStore,
    ) -> None:
        self._membership = membership_store
        self._locks = lock_store

    async def resolve_effective_lock(
        self,
        tenant_id: str,
        employee_id: str,
        period_month: PeriodInput,
    ) -> EffectiveLock:
        """Raises InvalidParameterError on bad input and LockResolutionFailed on store errors."""
        tenant_id = require_identifier(tenant_id, "tenant_id")
        employee_id = require_identifier(employee_id, "employee_id")
        month = normalize_period_month(period_month)

        try:
            effective = await self._resolve(tenant_id, employee_id, month)
        except TenantIsolationError as e:
            logger.error(
                "lock_resolution_failed",
                extra={"employee_id": employee_id, "period_month": month.isoformat(), "error": e.message},
            )
            raise LockResolutionFailed(f"Lock resolution failed: {e.message}") from e
        except Exception as e:
            logger.error(
                "lock_resolution_failed",
                extra={"employee_id": employee_id, "period_month": month.isoformat(), "error": str(e)},
            )
            raise LockResolutionFailed(f"Lock resolution failed: {e}") from e

        logger.info(
            "lock_resolved",
            extra={
                "employee_id": employee_id,
                "period_month": month.isoformat(),
                "locked": effective.locked,
                "source_level": effective.source_level.value,
            },
        )
        return effective

    async def _resolve(self, tenant_id: str, employee_id: str, month) -> EffectiveLock:
        employee_lock = await self._lookup(tenant_id, ScopeLevel.EMPLOYEE, employee_id, month)
        if employee_lock is not None:
            return EffectiveLock(
                locked=employee_lock.locked,
                source_level=LockSource.EMPLOYEE,
                reason=employee_lock.reason,
            )

        groups = await self._membership.list_groups_for_employee(tenant_id, employee_id)
        groups = TenantContext.ensure_same_tenant(groups, tenant_id)

        group_ids = sorted({g.group_id for g in groups})
        group_locks = [
            await self._lookup(tenant_id, ScopeLevel.GROUP, group_id, month)
            for group_id in group_ids
        ]
        effective = _combine(group_locks, LockSource.GROUP)
        if effective is not None:
            return effective

        environment_ids = sorted({g.environment_id for g in groups if g.environment_id})
        environment_locks = [
            await self._lookup(tenant_id, ScopeLevel.ENVIRONMENT, environment_id, month)
            for environment_id in environment_ids
        ]
        effective = _combine(environment_locks, LockSource.ENVIRONMENT)
        if effective is not None:
            return effective

        tenant_lock = await self._lookup(tenant_id, ScopeLevel.TENANT, tenant_id, month)
        if tenant_lock is not None:
            return EffectiveLock(
                locked=tenant_lock.locked,
                source_level=LockSource.TENANT,
                reason=tenant_lock.reason,
            )
        return EffectiveLock.unlocked()

    async def _lookup(self, tenant_id: str, level: ScopeLevel, scope_id: str, month) -> Optional[PeriodLock]:
        record = await self._locks.get_override(tenant_id, level, scope_id, month)
        if record is not None:
            TenantContext.validate_access(record.tenant_id, tenant_id)
        return record
