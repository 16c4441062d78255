"""Audit repository protocol. Governance layer depends on this; infrastructure implements it."""

from typing import Protocol

from timesheet_access.governance.audit_models import AuditRecord


class AuditRepository(Protocol):
    """Append-only sink for audit records. No update or delete operations exist."""

    async def save(self, record: AuditRecord) -> None:
        """Append an immutable audit record."""
        ...
