# Application layer: services that orchestrate security, periods, governance and notifications.

from timesheet_access.application.access_service import AccessCheckResult, AccessService
from timesheet_access.application.edit_gate import (
    EditAuthorization,
    EditError,
    EditGate,
    EditIntent,
)
from timesheet_access.application.entry_edit_service import EntryEditService
from timesheet_access.application.exceptions import ApplicationError, StoreUnavailableError

__all__ = [
    "AccessCheckResult",
    "AccessService",
    "EditAuthorization",
    "EditError",
    "EditGate",
    "EditIntent",
    "EntryEditService",
    "ApplicationError",
    "StoreUnavailableError",
]
