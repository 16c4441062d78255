"""Pydantic schemas for the access API. Strict validation, no DB or infrastructure."""

from typing import List, Optional

from pydantic import BaseModel, Field

from timesheet_access.domain.models.access import AccessDecision, DenialReason


class AccessCheckRequest(BaseModel):
    """Raw report parameters. Values are validated by the parameter sanitizer, not here."""

    params: dict = Field(default_factory=dict, description="Untrusted report/query parameters")


class AccessDecisionResponse(BaseModel):
    allowed: bool
    reason: Optional[DenialReason] = None
    resolved_employee_id: Optional[str] = None
    resolved_employee_set: Optional[List[str]] = None
    message: Optional[str] = None
    sanitized: dict = Field(default_factory=dict)

    @classmethod
    def from_decision(cls, decision: AccessDecision, sanitized: Optional[dict] = None) -> "AccessDecisionResponse":
        return cls(
            allowed=decision.allowed,
            reason=decision.reason,
            resolved_employee_id=decision.resolved_employee_id,
            resolved_employee_set=(
                sorted(decision.resolved_employee_set)
                if decision.resolved_employee_set is not None
                else None
            ),
            message=decision.message,
            sanitized=sanitized or {},
        )
