"""Domain schemas. Request/response and validation."""

from timesheet_access.domain.schemas.access import AccessCheckRequest, AccessDecisionResponse
from timesheet_access.domain.schemas.entry_edit import EditAuthorizationResponse, EntryEditRequest
from timesheet_access.domain.schemas.period_lock import (
    EffectiveLockResponse,
    PeriodLockResponse,
    SetLockRequest,
)

__all__ = [
    "AccessCheckRequest",
    "AccessDecisionResponse",
    "EditAuthorizationResponse",
    "EntryEditRequest",
    "EffectiveLockResponse",
    "PeriodLockResponse",
    "SetLockRequest",
]
