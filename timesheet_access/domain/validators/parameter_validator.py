"""Validation of untrusted request parameters. Pure functions, no store access."""

import re
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Dict, Mapping, Optional

from timesheet_access.domain.exceptions import InvalidParameterError, InvalidTenantError
from timesheet_access.domain.models.report import (
    ExportFormat,
    ReportScope,
    ReportType,
    TimesheetStatus,
)

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
PERIOD_MONTH_PATTERN = re.compile(r"^\d{4}-\d{2}(-\d{2})?$")
EMPLOYEE_ID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)

# Canonical field name -> accepted camelCase alias used by the web client
_ALIASES = {
    "start_date": "startDate",
    "end_date": "endDate",
    "employee_id": "employeeId",
    "period_month": "periodMonth",
}


@dataclass(frozen=True)
class ParameterValidationResult:
    valid: bool
    error: Optional[str] = None
    sanitized: Dict[str, str] = field(default_factory=dict)


def validate_tenant_id(tenant_id: Optional[str]) -> None:
    """Enforce tenant constraint: must not be empty. Raises InvalidTenantError if invalid."""
    if not tenant_id or not str(tenant_id).strip():
        raise InvalidTenantError("tenant_id must not be empty")


def require_identifier(value: Optional[str], name: str) -> str:
    """Return the stripped identifier; raise InvalidParameterError if empty."""
    if value is None or not str(value).strip():
        raise InvalidParameterError(f"{name} must not be empty")
    return str(value).strip()


def is_iso_calendar_date(value: str) -> bool:
    """YYYY-MM-DD that also names a real day (2025-02-30 is rejected)."""
    if not ISO_DATE_PATTERN.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def is_period_month(value: str) -> bool:
    if not PERIOD_MONTH_PATTERN.match(value):
        return False
    candidate = value if len(value) == 10 else f"{value}-01"
    return is_iso_calendar_date(candidate)


def is_employee_id(value: str) -> bool:
    return bool(EMPLOYEE_ID_PATTERN.match(value))


def _member_of(enum_cls) -> Callable[[str], bool]:
    values = frozenset(item.value for item in enum_cls)
    return lambda value: value in values


# field -> (validator, human-readable label)
_FIELD_RULES: Dict[str, tuple] = {
    "start_date": (is_iso_calendar_date, "start date"),
    "end_date": (is_iso_calendar_date, "end date"),
    "period_month": (is_period_month, "period month"),
    "status": (_member_of(TimesheetStatus), "status"),
    "employee_id": (is_employee_id, "employee id"),
    "type": (_member_of(ReportType), "report type"),
    "scope": (_member_of(ReportScope), "report scope"),
    "format": (_member_of(ExportFormat), "export format"),
}


def _raw_value(params: Mapping[str, Any], name: str) -> Any:
    value = params.get(name)
    if value is None and name in _ALIASES:
        value = params.get(_ALIASES[name])
    return value


def sanitize_parameters(params: Mapping[str, Any]) -> ParameterValidationResult:
    """
    Validate report/listing parameters before any access check.
    Missing or empty fields apply no filter. Any invalid field invalidates the whole
    request: all field errors are reported together and nothing is returned as sanitized.
    """
    sanitized: Dict[str, str] = {}
    errors: list[str] = []

    for name, (validator, label) in _FIELD_RULES.items():
        value = _raw_value(params, name)
        if value is None or value == "":
            continue
        if isinstance(value, str) and validator(value):
            sanitized[name] = value
        else:
            errors.append(f"invalid {label}")

    if errors:
        return ParameterValidationResult(valid=False, error="; ".join(errors), sanitized={})
    return ParameterValidationResult(valid=True, error=None, sanitized=sanitized)
