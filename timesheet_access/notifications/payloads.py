"""Payload builders for notification events."""

from datetime import date
from typing import Any, Dict, Optional


def build_timesheet_adjusted_payload(
    *,
    tenant_id: str,
    employee_id: str,
    manager_id: str,
    timesheet_id: str,
    period_month: date,
    justification: str,
    entry_id: Optional[str] = None,
    action: str = "update",
) -> Dict[str, Any]:
    """Tells the affected employee who changed a closed-period entry and why."""
    return {
        "tenant_id": tenant_id,
        "employee_id": employee_id,
        "manager_id": manager_id,
        "timesheet_id": timesheet_id,
        "entry_id": entry_id,
        "period": period_month.isoformat(),
        "action": action,
        "justification": justification.strip(),
    }
