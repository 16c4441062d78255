"""DB-backed period lock records and tenant lock settings."""

from datetime import date
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import func

from timesheet_access.domain.models.period_lock import PeriodLock, ScopeLevel, TenantLockSettings
from timesheet_access.infrastructure.database.models import PeriodLockRecord, TenantSettings

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def _to_lock(row: PeriodLockRecord) -> PeriodLock:
    return PeriodLock(
        tenant_id=row.tenant_id,
        scope_level=ScopeLevel(row.scope_level),
        scope_id=row.scope_id,
        period_month=row.period_month,
        locked=bool(row.locked),
        reason=row.reason,
    )


class DbLockOverrideStore:
    """Implements LockOverrideStore over the period_locks table. Upserts on the unique scope key."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_override(
        self,
        tenant_id: str,
        scope_level: ScopeLevel,
        scope_id: str,
        period_month: date,
    ) -> Optional[PeriodLock]:
        stmt = select(PeriodLockRecord).where(
            PeriodLockRecord.tenant_id == tenant_id,
            PeriodLockRecord.scope_level == ScopeLevel(scope_level).value,
            PeriodLockRecord.scope_id == scope_id,
            PeriodLockRecord.period_month == period_month,
        ).execution_options(populate_existing=True)
        result = await self._session.execute(stmt)
        row = result.scalar_one_or_none()
        return _to_lock(row) if row is not None else None

    async def save_override(self, lock: PeriodLock) -> PeriodLock:
        dialect = self._session.get_bind().dialect.name
        insert = _UPSERT_DIALECTS.get(dialect)
        if insert is None:
            raise NotImplementedError(f"lock upsert is not supported on '{dialect}'")

        payload = {
            "tenant_id": lock.tenant_id,
            "scope_level": lock.scope_level.value,
            "scope_id": lock.scope_id,
            "period_month": lock.period_month,
            "locked": lock.locked,
            "reason": lock.reason,
        }
        stmt = insert(PeriodLockRecord).values(**payload)
        # Key columns stay as inserted; only the lock state is replaced.
        stmt = stmt.on_conflict_do_update(
            index_elements=["tenant_id", "scope_level", "scope_id", "period_month"],
            set_={"locked": lock.locked, "reason": lock.reason, "updated_at": func.now()},
        )
        try:
            await self._session.execute(stmt)
            await self._session.commit()
        except Exception:
            await self._session.rollback()
            raise
        return lock

    async def list_overrides(
        self,
        tenant_id: str,
        scope_level: Optional[ScopeLevel] = None,
        period_month: Optional[date] = None,
    ) -> List[PeriodLock]:
        stmt = (
            select(PeriodLockRecord)
            .where(PeriodLockRecord.tenant_id == tenant_id)
            .execution_options(populate_existing=True)
        )
        if scope_level is not None:
            stmt = stmt.where(PeriodLockRecord.scope_level == ScopeLevel(scope_level).value)
        if period_month is not None:
            stmt = stmt.where(PeriodLockRecord.period_month == period_month)
        result = await self._session.execute(stmt)
        return [_to_lock(row) for row in result.scalars().all()]


class DbTenantSettingsStore:
    """Implements TenantSettingsStore over tenant_settings."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_lock_settings(self) -> List[TenantLockSettings]:
        result = await self._session.execute(
            select(TenantSettings).order_by(TenantSettings.tenant_id)
        )
        return [
            TenantLockSettings(
                tenant_id=row.tenant_id,
                deadline_day=row.deadline_day,
                auto_lock_enabled=True if row.auto_lock_enabled is None else bool(row.auto_lock_enabled),
            )
            for row in result.scalars().all()
        ]
