"""Immutable audit record model. Domain-level immutability."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class AuditAction(str, Enum):
    VIEW = "view"
    UPDATE = "update"
    DELETE = "delete"
    MANAGER_EDIT_CLOSED_PERIOD = "manager_edit_closed_period"
    ACCESS_GRANTED = "access_granted"
    ACCESS_DENIED = "access_denied"
    EDIT_DENIED = "edit_denied"
    PERIOD_LOCK_SET = "period_lock_set"
    PERIOD_AUTO_LOCKED = "period_auto_locked"


@dataclass(frozen=True)
class AuditRecord:
    """
    Append-only: who (actor), what (action on resource), when (UTC), before/after values
    and where the request came from. Never updated or deleted once written.
    """

    tenant_id: str
    actor_id: str
    action: AuditAction
    resource_type: str
    resource_id: Optional[str]
    old_values: Optional[Dict[str, Any]]
    new_values: Optional[Dict[str, Any]]
    timestamp_utc: datetime
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    correlation_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Structured representation for JSON logging."""
        return {
            "tenant_id": self.tenant_id,
            "actor_id": self.actor_id,
            "action": self.action.value,
            "resource_type": self.resource_type,
            "resource_id": self.resource_id,
            "old_values": self.old_values,
            "new_values": self.new_values,
            "timestamp_utc": self.timestamp_utc.isoformat(),
            "ip_address": self.ip_address,
            "user_agent": self.user_agent,
            "correlation_id": self.correlation_id,
        }
