"""Shared fixtures: in-memory, tenant-keyed fakes of the store protocols and a seeded organisation."""

from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Sequence, Set, Tuple

import pytest

from timesheet_access.application.access_service import AccessService
from timesheet_access.application.edit_gate import EditGate
from timesheet_access.application.entry_edit_service import EntryEditService
from timesheet_access.domain.models.membership import Group
from timesheet_access.domain.models.period_lock import PeriodLock, ScopeLevel, TenantLockSettings
from timesheet_access.governance.audit_logger import AuditLogger
from timesheet_access.governance.audit_models import AuditRecord
from timesheet_access.periods.lock_resolver import LockResolver
from timesheet_access.periods.months import normalize_period_month
from timesheet_access.security.access_validator import AccessValidator
from timesheet_access.security.scope_resolver import ScopeResolver


class StoreUnavailable(RuntimeError):
    pass


class InMemoryDirectory:
    """GroupMembershipStore + EmployeeDirectory. Group ids may repeat across tenants."""

    def __init__(self) -> None:
        self.groups: Dict[Tuple[str, str], Group] = {}
        self.members: Set[Tuple[str, str, str]] = set()
        self.managers: Set[Tuple[str, str, str]] = set()
        self.employees: Dict[Tuple[str, str], Optional[str]] = {}
        self.environments: Dict[str, str] = {}
        self.fail = False

    def _check(self) -> None:
        if self.fail:
            raise StoreUnavailable("membership store unavailable")

    def add_environment(self, tenant_id: str, environment_id: str) -> None:
        self.environments[environment_id] = tenant_id

    def add_group(self, tenant_id: str, group_id: str, environment_id: Optional[str] = None) -> None:
        self.groups[(tenant_id, group_id)] = Group(
            group_id=group_id, tenant_id=tenant_id, name=group_id, environment_id=environment_id
        )

    def add_employee(self, tenant_id: str, employee_id: str, user_id: Optional[str] = None) -> None:
        self.employees[(tenant_id, employee_id)] = user_id

    def add_member(self, tenant_id: str, group_id: str, employee_id: str) -> None:
        self.members.add((tenant_id, group_id, employee_id))

    def assign_manager(self, tenant_id: str, manager_id: str, group_id: str) -> None:
        self.managers.add((tenant_id, manager_id, group_id))

    async def list_groups_for_manager(self, tenant_id: str, manager_id: str) -> List[Group]:
        self._check()
        return [
            self.groups[(t, g)]
            for (t, m, g) in sorted(self.managers)
            if t == tenant_id and m == manager_id and (t, g) in self.groups
        ]

    async def list_employees_in_groups(self, tenant_id: str, group_ids: Sequence[str]) -> List[str]:
        self._check()
        wanted = set(group_ids)
        return [e for (t, g, e) in sorted(self.members) if t == tenant_id and g in wanted]

    async def list_groups_for_employee(self, tenant_id: str, employee_id: str) -> List[Group]:
        self._check()
        return [
            self.groups[(t, g)]
            for (t, g, e) in sorted(self.members)
            if t == tenant_id and e == employee_id and (t, g) in self.groups
        ]

    async def get_employee_id_for_user(self, tenant_id: str, user_id: str) -> Optional[str]:
        self._check()
        for (t, employee_id), linked_user in sorted(self.employees.items()):
            if t == tenant_id and linked_user == user_id:
                return employee_id
        return None

    async def get_entity_tenant(self, scope_level: ScopeLevel, entity_id: str) -> Optional[str]:
        self._check()
        level = ScopeLevel(scope_level)
        if level is ScopeLevel.TENANT:
            return entity_id
        if level is ScopeLevel.ENVIRONMENT:
            return self.environments.get(entity_id)
        keys = self.groups if level is ScopeLevel.GROUP else self.employees
        for tenant_id, key in sorted(keys):
            if key == entity_id:
                return tenant_id
        return None


class InMemoryLockStore:
    """LockOverrideStore keyed by (tenant, level, scope id, month)."""

    def __init__(self) -> None:
        self.records: Dict[Tuple[str, str, str, date], PeriodLock] = {}
        self.fail = False

    def _check(self) -> None:
        if self.fail:
            raise StoreUnavailable("lock store unavailable")

    def put(
        self,
        tenant_id: str,
        level: ScopeLevel,
        scope_id: str,
        month: str,
        locked: bool = True,
        reason: Optional[str] = None,
    ) -> PeriodLock:
        lock = PeriodLock(
            tenant_id=tenant_id,
            scope_level=level,
            scope_id=scope_id,
            period_month=normalize_period_month(month),
            locked=locked,
            reason=reason,
        )
        self.records[(tenant_id, level.value, scope_id, lock.period_month)] = lock
        return lock

    async def get_override(self, tenant_id, scope_level, scope_id, period_month):
        self._check()
        return self.records.get((tenant_id, ScopeLevel(scope_level).value, scope_id, period_month))

    async def save_override(self, lock: PeriodLock) -> PeriodLock:
        self._check()
        self.records[(lock.tenant_id, lock.scope_level.value, lock.scope_id, lock.period_month)] = lock
        return lock

    async def list_overrides(self, tenant_id, scope_level=None, period_month=None):
        self._check()
        return [
            lock
            for lock in self.records.values()
            if lock.tenant_id == tenant_id
            and (scope_level is None or lock.scope_level == ScopeLevel(scope_level))
            and (period_month is None or lock.period_month == period_month)
        ]


class InMemorySettingsStore:
    def __init__(self, settings: Optional[List[TenantLockSettings]] = None) -> None:
        self.settings = list(settings or [])

    async def list_lock_settings(self) -> List[TenantLockSettings]:
        return list(self.settings)


class InMemoryAuditRepository:
    def __init__(self) -> None:
        self.records: List[AuditRecord] = []
        self.fail = False

    async def save(self, record: AuditRecord) -> None:
        if self.fail:
            raise StoreUnavailable("audit sink unavailable")
        self.records.append(record)

    def actions(self) -> List[str]:
        return [r.action.value for r in self.records]


class RecordingDispatcher:
    def __init__(self) -> None:
        self.sent: List[tuple] = []
        self.fail = False

    async def notify(self, event, recipient, payload) -> None:
        if self.fail:
            raise StoreUnavailable("broker unavailable")
        self.sent.append((event, recipient, payload))


@dataclass(frozen=True)
class Org:
    """
    tenant-a: environment vessel-1 holds groups deck and engine; office has no environment.
      alice in deck, bob in deck and engine, carol in office.
      manager (user u-mgr) manages deck and engine; idle manager (u-idle) manages nothing.
    tenant-b: a group also named deck, with zed; u-mgr also manages it there.
    """

    tenant: str = "tenant-a"
    other_tenant: str = "tenant-b"
    vessel: str = "vessel-1"
    deck: str = "deck"
    engine: str = "engine"
    office: str = "office"
    alice: str = "6f1c2a7e-1d3b-4c5a-9e8f-0a1b2c3d4e01"
    bob: str = "6f1c2a7e-1d3b-4c5a-9e8f-0a1b2c3d4e02"
    carol: str = "6f1c2a7e-1d3b-4c5a-9e8f-0a1b2c3d4e03"
    manager_employee: str = "6f1c2a7e-1d3b-4c5a-9e8f-0a1b2c3d4e04"
    idle_employee: str = "6f1c2a7e-1d3b-4c5a-9e8f-0a1b2c3d4e05"
    zed: str = "6f1c2a7e-1d3b-4c5a-9e8f-0a1b2c3d4e06"
    alice_user: str = "u-alice"
    carol_user: str = "u-carol"
    manager_user: str = "u-mgr"
    idle_user: str = "u-idle"
    admin_user: str = "u-admin"


@pytest.fixture
def org() -> Org:
    return Org()


@pytest.fixture
def directory(org) -> InMemoryDirectory:
    d = InMemoryDirectory()
    d.add_environment(org.tenant, org.vessel)
    d.add_group(org.tenant, org.deck, environment_id=org.vessel)
    d.add_group(org.tenant, org.engine, environment_id=org.vessel)
    d.add_group(org.tenant, org.office)
    d.add_employee(org.tenant, org.alice, org.alice_user)
    d.add_employee(org.tenant, org.bob)
    d.add_employee(org.tenant, org.carol, org.carol_user)
    d.add_employee(org.tenant, org.manager_employee, org.manager_user)
    d.add_employee(org.tenant, org.idle_employee, org.idle_user)
    d.add_member(org.tenant, org.deck, org.alice)
    d.add_member(org.tenant, org.deck, org.bob)
    d.add_member(org.tenant, org.engine, org.bob)
    d.add_member(org.tenant, org.office, org.carol)
    d.assign_manager(org.tenant, org.manager_user, org.deck)
    d.assign_manager(org.tenant, org.manager_user, org.engine)

    d.add_group(org.other_tenant, org.deck)
    d.add_employee(org.other_tenant, org.zed)
    d.add_member(org.other_tenant, org.deck, org.zed)
    d.assign_manager(org.other_tenant, org.manager_user, org.deck)
    return d


@pytest.fixture
def lock_store() -> InMemoryLockStore:
    return InMemoryLockStore()


@pytest.fixture
def audit_repository() -> InMemoryAuditRepository:
    return InMemoryAuditRepository()


@pytest.fixture
def audit_logger(audit_repository) -> AuditLogger:
    return AuditLogger(repository=audit_repository)


@pytest.fixture
def dispatcher() -> RecordingDispatcher:
    return RecordingDispatcher()


@pytest.fixture
def scope_resolver(directory) -> ScopeResolver:
    return ScopeResolver(directory)


@pytest.fixture
def access_validator(scope_resolver, directory) -> AccessValidator:
    return AccessValidator(scope_resolver, directory)


@pytest.fixture
def lock_resolver(directory, lock_store) -> LockResolver:
    return LockResolver(directory, lock_store)


@pytest.fixture
def edit_gate(access_validator, lock_resolver) -> EditGate:
    return EditGate(access_validator, lock_resolver, justification_min_length=10)


@pytest.fixture
def access_service(access_validator, audit_logger) -> AccessService:
    return AccessService(access_validator, audit_logger)


@pytest.fixture
def entry_edit_service(edit_gate, audit_logger, dispatcher) -> EntryEditService:
    return EntryEditService(edit_gate, audit_logger, dispatcher)


@pytest.fixture
def settings_store() -> InMemorySettingsStore:
    return InMemorySettingsStore()
