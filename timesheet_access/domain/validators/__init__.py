"""Domain validators. Pure validation functions."""

from timesheet_access.domain.validators.parameter_validator import (
    ParameterValidationResult,
    is_employee_id,
    is_iso_calendar_date,
    is_period_month,
    require_identifier,
    sanitize_parameters,
    validate_tenant_id,
)

__all__ = [
    "ParameterValidationResult",
    "is_employee_id",
    "is_iso_calendar_date",
    "is_period_month",
    "require_identifier",
    "sanitize_parameters",
    "validate_tenant_id",
]
