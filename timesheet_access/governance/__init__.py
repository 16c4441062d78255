"""Governance: append-only audit trail of access and edit decisions. No FastAPI."""

from timesheet_access.governance.audit_logger import AuditLogger
from timesheet_access.governance.audit_models import AuditAction, AuditRecord
from timesheet_access.governance.exceptions import AuditWriteFailed

__all__ = [
    "AuditAction",
    "AuditLogger",
    "AuditRecord",
    "AuditWriteFailed",
]
