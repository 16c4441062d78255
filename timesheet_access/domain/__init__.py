"""Domain layer: models, schemas, validators, exceptions. Pure business logic only."""

from timesheet_access.domain.exceptions import (
    DomainError,
    InvalidParameterError,
    InvalidPeriodError,
    InvalidTenantError,
)
from timesheet_access.domain.models import (
    AccessDecision,
    DenialReason,
    EffectiveLock,
    Group,
    LockSource,
    PeriodLock,
    ScopeLevel,
)
from timesheet_access.domain.validators import (
    ParameterValidationResult,
    sanitize_parameters,
    validate_tenant_id,
)

__all__ = [
    "AccessDecision",
    "DenialReason",
    "DomainError",
    "EffectiveLock",
    "Group",
    "InvalidParameterError",
    "InvalidPeriodError",
    "InvalidTenantError",
    "LockSource",
    "ParameterValidationResult",
    "PeriodLock",
    "ScopeLevel",
    "sanitize_parameters",
    "validate_tenant_id",
]
