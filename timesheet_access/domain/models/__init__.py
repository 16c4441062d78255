"""Domain models. Pure business entities."""

from timesheet_access.domain.models.access import AccessDecision, DenialReason
from timesheet_access.domain.models.membership import Group
from timesheet_access.domain.models.period_lock import (
    EffectiveLock,
    LockSource,
    PeriodLock,
    ScopeLevel,
    TenantLockSettings,
)
from timesheet_access.domain.models.report import (
    ExportFormat,
    ReportScope,
    ReportType,
    TimesheetStatus,
)

__all__ = [
    "AccessDecision",
    "DenialReason",
    "EffectiveLock",
    "ExportFormat",
    "Group",
    "LockSource",
    "PeriodLock",
    "ReportScope",
    "ReportType",
    "ScopeLevel",
    "TenantLockSettings",
    "TimesheetStatus",
]
