# scripts/run_auto_lock.py
"""Daily cron entry point: lock the previous month for tenants past their deadline."""
import sys
from pathlib import Path

# Ensure project root is on the path when running this script directly
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import asyncio
from datetime import date

from timesheet_access.config.logging import configure_logging
from timesheet_access.config.settings import get_settings
from timesheet_access.governance.audit_logger import AuditLogger
from timesheet_access.infrastructure.database.audit_repository_db import DbAuditRepository
from timesheet_access.infrastructure.database.lock_store_db import (
    DbLockOverrideStore,
    DbTenantSettingsStore,
)
from timesheet_access.infrastructure.database.session import get_engine, get_sessionmaker
from timesheet_access.periods.auto_lock import AutoLockService, AutoLockStatus


async def run_auto_lock(today: date) -> int:
    settings = get_settings()
    async with get_sessionmaker()() as session:
        service = AutoLockService(
            settings_store=DbTenantSettingsStore(session),
            lock_store=DbLockOverrideStore(session),
            audit_logger=AuditLogger(DbAuditRepository(session)),
            default_deadline_day=settings.default_deadline_day,
        )
        outcomes = await service.run(today)
    await get_engine().dispose()

    for outcome in outcomes:
        period = outcome.period_month.isoformat() if outcome.period_month else "-"
        print(f"{outcome.tenant_id}: {outcome.status.value} {period}")
    return 1 if any(o.status is AutoLockStatus.FAILED for o in outcomes) else 0


if __name__ == "__main__":
    configure_logging(get_settings().log_level)
    run_date = date.fromisoformat(sys.argv[1]) if len(sys.argv) > 1 else date.today()
    sys.exit(asyncio.run(run_auto_lock(run_date)))
