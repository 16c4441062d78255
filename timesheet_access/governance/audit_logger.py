"""Best-effort, append-only audit logging of access and edit decisions. No FastAPI."""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from timesheet_access.governance.audit_models import AuditAction, AuditRecord
from timesheet_access.governance.audit_repository import AuditRepository
from timesheet_access.governance.exceptions import AuditWriteFailed

ops_logger = logging.getLogger("timesheet_access.ops")

ErrorChannel = Callable[[AuditWriteFailed], None]


class AuditLogger:
    """
    Appends immutable audit records via repository.
    A failing sink never raises into the caller: the failure is logged on the ops logger
    and handed to the optional error channel, and the business action proceeds.
    """

    def __init__(
        self,
        repository: AuditRepository,
        error_channel: Optional[ErrorChannel] = None,
    ) -> None:
        self._repository = repository
        self._error_channel = error_channel

    async def append(self, record: AuditRecord) -> bool:
        """Return True when the record was written, False when the sink failed."""
        try:
            await self._repository.save(record)
        except Exception as e:
            failure = AuditWriteFailed(f"Audit write failed: {e}", record=record)
            ops_logger.error(
                "audit_write_failed",
                extra={
                    "audit_action": record.action.value,
                    "resource_type": record.resource_type,
                    "resource_id": record.resource_id,
                    "error": str(e),
                },
            )
            if self._error_channel is not None:
                try:
                    self._error_channel(failure)
                except Exception as channel_error:
                    ops_logger.error(
                        "audit_error_channel_failed",
                        extra={"error": str(channel_error)},
                    )
            return False
        return True

    async def log_action(
        self,
        *,
        actor_id: str,
        tenant_id: str,
        action: AuditAction,
        resource_type: str,
        resource_id: Optional[str] = None,
        old_values: Optional[Dict[str, Any]] = None,
        new_values: Optional[Dict[str, Any]] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
        correlation_id: Optional[str] = None,
    ) -> bool:
        """Build a UTC-stamped record and append it."""
        record = AuditRecord(
            tenant_id=tenant_id,
            actor_id=actor_id,
            action=action,
            resource_type=resource_type,
            resource_id=resource_id,
            old_values=old_values,
            new_values=new_values,
            timestamp_utc=datetime.now(timezone.utc),
            ip_address=ip_address,
            user_agent=user_agent,
            correlation_id=correlation_id,
        )
        return await self.append(record)
