"""Pydantic schemas for timesheet entry edit authorization."""

import json
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, Field, field_validator


class EntryEditRequest(BaseModel):
    employee_id: str = Field(..., min_length=1, description="Owner of the timesheet")
    period_month: str = Field(..., min_length=7, description="YYYY-MM or YYYY-MM-DD")
    intent: Literal["update", "delete"] = "update"
    justification: Optional[str] = None
    changes: Optional[Dict[str, Any]] = Field(None, description="Fields the caller intends to change")

    @field_validator("changes")
    @classmethod
    def changes_must_be_json_serializable(cls, v: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        if v is None:
            return v
        try:
            json.dumps(v)
        except (TypeError, ValueError) as e:
            raise ValueError("changes must be JSON-serializable") from e
        return v


class EditAuthorizationResponse(BaseModel):
    allowed: bool
    requires_audit: Optional[str] = None
    error: Optional[str] = None
    effective_lock: Optional[Dict[str, Any]] = None

    @classmethod
    def from_authorization(cls, result) -> "EditAuthorizationResponse":
        """result is an application EditAuthorization."""
        return cls(**result.to_dict())
