"""Period lock records and the resolved lock state. No ORM."""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional


class ScopeLevel(str, Enum):
    """Granularity at which a period lock override can be declared."""

    TENANT = "tenant"
    ENVIRONMENT = "environment"
    GROUP = "group"
    EMPLOYEE = "employee"


class LockSource(str, Enum):
    """Level that produced an effective lock. NONE when no record exists at any level."""

    EMPLOYEE = "employee"
    GROUP = "group"
    ENVIRONMENT = "environment"
    TENANT = "tenant"
    NONE = "none"


@dataclass(frozen=True)
class PeriodLock:
    """
    Lock record at one scope level, keyed by (tenant, level, scope id, period-month).
    For tenant-level records scope_id is the tenant id.
    """

    tenant_id: str
    scope_level: ScopeLevel
    scope_id: str
    period_month: date
    locked: bool
    reason: Optional[str] = None


@dataclass(frozen=True)
class EffectiveLock:
    locked: bool
    source_level: LockSource
    reason: Optional[str] = None

    @classmethod
    def unlocked(cls) -> "EffectiveLock":
        return cls(locked=False, source_level=LockSource.NONE, reason=None)

    def to_dict(self) -> dict:
        return {
            "locked": self.locked,
            "reason": self.reason,
            "source_level": self.source_level.value,
        }


@dataclass(frozen=True)
class TenantLockSettings:
    """Deadline configuration for automatic locking. deadline_day 0 = last day of month."""

    tenant_id: str
    deadline_day: Optional[int] = None
    auto_lock_enabled: bool = True
