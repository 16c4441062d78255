"""Deadline-driven locking of the previous month at tenant level. Run once a day by a scheduler."""

import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import List, Optional

from timesheet_access.domain.models.period_lock import PeriodLock, ScopeLevel, TenantLockSettings
from timesheet_access.domain.stores import LockOverrideStore, TenantSettingsStore
from timesheet_access.governance.audit_logger import AuditLogger
from timesheet_access.governance.audit_models import AuditAction
from timesheet_access.periods.months import deadline_in_month, previous_month

logger = logging.getLogger(__name__)

SYSTEM_ACTOR = "system"


class AutoLockStatus(str, Enum):
    LOCKED = "locked"
    ALREADY_PRESENT = "already_present"
    BEFORE_DEADLINE = "before_deadline"
    DISABLED = "disabled"
    FAILED = "failed"


@dataclass(frozen=True)
class AutoLockOutcome:
    tenant_id: str
    status: AutoLockStatus
    period_month: Optional[date] = None
    detail: Optional[str] = None


def auto_lock_reason(deadline_day: int) -> str:
    if deadline_day <= 0:
        return "Locked automatically after the last day of the month"
    return f"Locked automatically after day {deadline_day}"


class AutoLockService:
    """
    Once today is past a tenant's deadline for the current month, the previous month gets
    a locked tenant-level record. An existing tenant record for that month is left as is,
    so an administrator's explicit unlock is never overridden.
    """

    def __init__(
        self,
        settings_store: TenantSettingsStore,
        lock_store: LockOverrideStore,
        audit_logger: AuditLogger,
        default_deadline_day: int = 0,
    ) -> None:
        self._settings = settings_store
        self._locks = lock_store
        self._audit = audit_logger
        self._default_deadline_day = default_deadline_day

    async def run(self, today: date) -> List[AutoLockOutcome]:
        outcomes: List[AutoLockOutcome] = []
        for settings in await self._settings.list_lock_settings():
            try:
                outcome = await self._lock_tenant(settings, today)
            except Exception as e:
                # One tenant's failure must not stop the others.
                logger.error(
                    "auto_lock_failed",
                    extra={"tenant_id": settings.tenant_id, "error": str(e)},
                )
                outcome = AutoLockOutcome(
                    tenant_id=settings.tenant_id,
                    status=AutoLockStatus.FAILED,
                    detail=str(e),
                )
            outcomes.append(outcome)
        logger.info(
            "auto_lock_completed",
            extra={
                "tenants": len(outcomes),
                "locked": sum(1 for o in outcomes if o.status is AutoLockStatus.LOCKED),
            },
        )
        return outcomes

    async def _lock_tenant(self, settings: TenantLockSettings, today: date) -> AutoLockOutcome:
        tenant_id = settings.tenant_id
        if not settings.auto_lock_enabled:
            return AutoLockOutcome(tenant_id=tenant_id, status=AutoLockStatus.DISABLED)

        deadline_day = (
            settings.deadline_day
            if settings.deadline_day is not None
            else self._default_deadline_day
        )
        period = previous_month(today.replace(day=1))
        if deadline_day <= 0:
            # The period closes as soon as it has ended.
            deadline = deadline_in_month(period.year, period.month, 0)
        else:
            deadline = deadline_in_month(today.year, today.month, deadline_day)
        if today <= deadline:
            return AutoLockOutcome(tenant_id=tenant_id, status=AutoLockStatus.BEFORE_DEADLINE)

        existing = await self._locks.get_override(tenant_id, ScopeLevel.TENANT, tenant_id, period)
        if existing is not None:
            return AutoLockOutcome(
                tenant_id=tenant_id,
                status=AutoLockStatus.ALREADY_PRESENT,
                period_month=period,
            )

        reason = auto_lock_reason(deadline_day)
        await self._locks.save_override(
            PeriodLock(
                tenant_id=tenant_id,
                scope_level=ScopeLevel.TENANT,
                scope_id=tenant_id,
                period_month=period,
                locked=True,
                reason=reason,
            )
        )
        await self._audit.log_action(
            actor_id=SYSTEM_ACTOR,
            tenant_id=tenant_id,
            action=AuditAction.PERIOD_AUTO_LOCKED,
            resource_type="period_lock",
            resource_id=f"{ScopeLevel.TENANT.value}:{tenant_id}:{period.isoformat()}",
            old_values=None,
            new_values={"locked": True, "reason": reason},
        )
        logger.info(
            "period_auto_locked",
            extra={"tenant_id": tenant_id, "period_month": period.isoformat()},
        )
        return AutoLockOutcome(tenant_id=tenant_id, status=AutoLockStatus.LOCKED, period_month=period)
