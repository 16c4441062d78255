"""Store protocols consumed by the resolvers. Infrastructure implements them; every call is tenant-scoped."""

from datetime import date
from typing import Iterable, List, Optional, Protocol, Sequence

from timesheet_access.domain.models.membership import Group
from timesheet_access.domain.models.period_lock import (
    PeriodLock,
    ScopeLevel,
    TenantLockSettings,
)


class GroupMembershipStore(Protocol):
    """Read-only employee<->group and manager<->group relations."""

    async def list_groups_for_manager(self, tenant_id: str, manager_id: str) -> List[Group]:
        ...

    async def list_employees_in_groups(
        self, tenant_id: str, group_ids: Sequence[str]
    ) -> List[str]:
        ...

    async def list_groups_for_employee(self, tenant_id: str, employee_id: str) -> List[Group]:
        ...


class EmployeeDirectory(Protocol):
    """Links login users to employees and reports which tenant owns a scope entity."""

    async def get_employee_id_for_user(self, tenant_id: str, user_id: str) -> Optional[str]:
        """Employee linked to the user's profile in this tenant, or None."""
        ...

    async def get_entity_tenant(self, scope_level: ScopeLevel, entity_id: str) -> Optional[str]:
        """Tenant owning the group/employee/environment, or None if it does not exist."""
        ...


class LockOverrideStore(Protocol):
    """Lock records at the four scope levels."""

    async def get_override(
        self,
        tenant_id: str,
        scope_level: ScopeLevel,
        scope_id: str,
        period_month: date,
    ) -> Optional[PeriodLock]:
        ...

    async def save_override(self, lock: PeriodLock) -> PeriodLock:
        """Insert or replace the record with the same key. Last write wins."""
        ...

    async def list_overrides(
        self,
        tenant_id: str,
        scope_level: Optional[ScopeLevel] = None,
        period_month: Optional[date] = None,
    ) -> List[PeriodLock]:
        ...


class TenantSettingsStore(Protocol):
    """Per-tenant deadline configuration used by automatic period locking."""

    async def list_lock_settings(self) -> Iterable[TenantLockSettings]:
        ...
