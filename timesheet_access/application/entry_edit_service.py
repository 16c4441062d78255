"""Entry edit authorization as handled for a request: gate, audit, employee notification."""

import logging
from typing import Any, Dict, Optional

from timesheet_access.application.edit_gate import EditAuthorization, EditGate, EditIntent
from timesheet_access.application.exceptions import StoreUnavailableError
from timesheet_access.governance.audit_logger import AuditLogger
from timesheet_access.governance.audit_models import AuditAction
from timesheet_access.notifications.dispatcher import NotificationDispatcher, NotificationEvent
from timesheet_access.notifications.payloads import build_timesheet_adjusted_payload
from timesheet_access.periods.months import PeriodInput, normalize_period_month
from timesheet_access.security.rbac import Role

logger = logging.getLogger(__name__)


class EntryEditService:
    """
    Runs the edit gate and records its verdict. An allowed edit of a closed period also
    notifies the affected employee; a failed notification never reverses the decision.
    """

    def __init__(
        self,
        edit_gate: EditGate,
        audit_logger: AuditLogger,
        dispatcher: NotificationDispatcher,
    ) -> None:
        self._gate = edit_gate
        self._audit = audit_logger
        self._dispatcher = dispatcher

    async def authorize_edit(
        self,
        *,
        actor_id: str,
        role: "Role | str",
        tenant_id: str,
        timesheet_id: str,
        employee_id: str,
        period_month: PeriodInput,
        entry_id: Optional[str] = None,
        justification: Optional[str] = None,
        intent: EditIntent = EditIntent.UPDATE,
        changes: Optional[Dict[str, Any]] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
        correlation_id: Optional[str] = None,
    ) -> EditAuthorization:
        try:
            result = await self._gate.authorize_entry_edit(
                actor_id,
                role,
                tenant_id,
                timesheet_id,
                employee_id,
                period_month,
                justification=justification,
                intent=intent,
            )
        except Exception as e:
            logger.error("edit_authorization_failed", extra={"error": str(e)})
            await self._audit.log_action(
                actor_id=actor_id,
                tenant_id=tenant_id,
                action=AuditAction.EDIT_DENIED,
                resource_type="timesheet_entry",
                resource_id=entry_id or timesheet_id,
                new_values={
                    "timesheet_id": timesheet_id,
                    "employee_id": employee_id,
                    "intent": str(getattr(intent, "value", intent)),
                    "error": StoreUnavailableError.code,
                },
                ip_address=ip_address,
                user_agent=user_agent,
                correlation_id=correlation_id,
            )
            raise StoreUnavailableError(f"Edit authorization failed: {e}") from e

        new_values: Dict[str, Any] = {
            "timesheet_id": timesheet_id,
            "employee_id": employee_id,
            "intent": str(getattr(intent, "value", intent)),
        }
        if changes:
            new_values["changes"] = changes
        if result.allowed:
            action = result.requires_audit
            if action is AuditAction.MANAGER_EDIT_CLOSED_PERIOD:
                new_values["justification"] = (justification or "").strip()
        else:
            action = AuditAction.EDIT_DENIED
            new_values["error"] = result.error

        await self._audit.log_action(
            actor_id=actor_id,
            tenant_id=tenant_id,
            action=action,
            resource_type="timesheet_entry",
            resource_id=entry_id or timesheet_id,
            new_values=new_values,
            ip_address=ip_address,
            user_agent=user_agent,
            correlation_id=correlation_id,
        )

        if result.allowed and result.requires_audit is AuditAction.MANAGER_EDIT_CLOSED_PERIOD:
            await self._notify_employee(
                actor_id=actor_id,
                tenant_id=tenant_id,
                timesheet_id=timesheet_id,
                employee_id=employee_id,
                entry_id=entry_id,
                period_month=period_month,
                justification=justification or "",
                intent=intent,
            )
        return result

    async def _notify_employee(
        self,
        *,
        actor_id: str,
        tenant_id: str,
        timesheet_id: str,
        employee_id: str,
        entry_id: Optional[str],
        period_month: PeriodInput,
        justification: str,
        intent,
    ) -> None:
        try:
            payload = build_timesheet_adjusted_payload(
                tenant_id=tenant_id,
                employee_id=employee_id,
                manager_id=actor_id,
                timesheet_id=timesheet_id,
                period_month=normalize_period_month(period_month),
                justification=justification,
                entry_id=entry_id,
                action=str(getattr(intent, "value", intent)),
            )
            await self._dispatcher.notify(
                NotificationEvent.TIMESHEET_ADJUSTED, employee_id, payload
            )
        except Exception as e:
            logger.warning(
                "notification_failed",
                extra={"employee_id": employee_id, "error": str(e)},
            )
