"""DB-backed audit repository. Insert only."""

from sqlalchemy.ext.asyncio import AsyncSession

from timesheet_access.governance.audit_models import AuditRecord
from timesheet_access.infrastructure.database.models import AuditLog


class DbAuditRepository:
    """Implements AuditRepository over the audit_log table."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def save(self, record: AuditRecord) -> None:
        self._session.add(
            AuditLog(
                tenant_id=record.tenant_id,
                actor_id=record.actor_id,
                action=record.action.value,
                resource_type=record.resource_type,
                resource_id=record.resource_id,
                old_values=record.old_values,
                new_values=record.new_values,
                timestamp_utc=record.timestamp_utc,
                ip_address=record.ip_address,
                user_agent=record.user_agent,
                correlation_id=record.correlation_id,
            )
        )
        try:
            await self._session.commit()
        except Exception:
            await self._session.rollback()
            raise
