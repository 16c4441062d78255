"""Period locks: month normalisation, effective-lock resolution, administration, auto-lock."""

from timesheet_access.periods.auto_lock import AutoLockOutcome, AutoLockService, AutoLockStatus
from timesheet_access.periods.exceptions import LockResolutionFailed, PeriodError
from timesheet_access.periods.lock_resolver import LockResolver
from timesheet_access.periods.lock_service import PeriodLockService
from timesheet_access.periods.months import normalize_period_month

__all__ = [
    "AutoLockOutcome",
    "AutoLockService",
    "AutoLockStatus",
    "LockResolutionFailed",
    "LockResolver",
    "PeriodError",
    "PeriodLockService",
    "normalize_period_month",
]
