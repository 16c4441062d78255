"""Pydantic schemas for period lock administration and lookup."""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from timesheet_access.domain.models.period_lock import (
    EffectiveLock,
    LockSource,
    PeriodLock,
    ScopeLevel,
)


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

class SetLockRequest(BaseModel):
    """Create or replace one lock record. scope_id is ignored at tenant level."""

    scope_level: ScopeLevel
    scope_id: Optional[str] = None
    period_month: str = Field(..., min_length=7, description="YYYY-MM or YYYY-MM-DD")
    locked: bool = True
    reason: Optional[str] = Field(None, max_length=500)

    @field_validator("scope_id")
    @classmethod
    def scope_id_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------

class PeriodLockResponse(BaseModel):
    tenant_id: str
    scope_level: ScopeLevel
    scope_id: str
    period_month: date
    locked: bool
    reason: Optional[str] = None

    @classmethod
    def from_lock(cls, lock: PeriodLock) -> "PeriodLockResponse":
        return cls(
            tenant_id=lock.tenant_id,
            scope_level=lock.scope_level,
            scope_id=lock.scope_id,
            period_month=lock.period_month,
            locked=lock.locked,
            reason=lock.reason,
        )


class EffectiveLockResponse(BaseModel):
    employee_id: str
    period_month: date
    locked: bool
    source_level: LockSource
    reason: Optional[str] = None

    @classmethod
    def from_effective(
        cls, employee_id: str, period_month: date, effective: EffectiveLock
    ) -> "EffectiveLockResponse":
        return cls(
            employee_id=employee_id,
            period_month=period_month,
            locked=effective.locked,
            source_level=effective.source_level,
            reason=effective.reason,
        )
