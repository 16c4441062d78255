"""Effective lock resolution: precedence, conservative union, tenant isolation, fail-closed."""

import pytest

from timesheet_access.domain.exceptions import InvalidParameterError
from timesheet_access.domain.models.period_lock import LockSource, PeriodLock, ScopeLevel
from timesheet_access.periods.exceptions import LockResolutionFailed
from timesheet_access.periods.months import normalize_period_month

MONTH = "2025-01"


async def test_no_record_anywhere_is_unlocked(lock_resolver, org):
    effective = await lock_resolver.resolve_effective_lock(org.tenant, org.alice, MONTH)
    assert effective.locked is False
    assert effective.source_level is LockSource.NONE
    assert effective.reason is None


async def test_tenant_lock_applies_to_everyone(lock_resolver, lock_store, org):
    lock_store.put(org.tenant, ScopeLevel.TENANT, org.tenant, MONTH, reason="January closed")
    effective = await lock_resolver.resolve_effective_lock(org.tenant, org.carol, MONTH)
    assert effective.locked is True
    assert effective.source_level is LockSource.TENANT
    assert effective.reason == "January closed"


async def test_environment_overrides_tenant(lock_resolver, lock_store, org):
    lock_store.put(org.tenant, ScopeLevel.TENANT, org.tenant, MONTH, locked=True)
    lock_store.put(org.tenant, ScopeLevel.ENVIRONMENT, org.vessel, MONTH, locked=False)
    effective = await lock_resolver.resolve_effective_lock(org.tenant, org.alice, MONTH)
    assert effective.locked is False
    assert effective.source_level is LockSource.ENVIRONMENT


async def test_group_overrides_environment(lock_resolver, lock_store, org):
    lock_store.put(org.tenant, ScopeLevel.ENVIRONMENT, org.vessel, MONTH, locked=True)
    lock_store.put(org.tenant, ScopeLevel.GROUP, org.deck, MONTH, locked=False)
    effective = await lock_resolver.resolve_effective_lock(org.tenant, org.alice, MONTH)
    assert effective.locked is False
    assert effective.source_level is LockSource.GROUP


ALL_LEVELS = [ScopeLevel.TENANT, ScopeLevel.ENVIRONMENT, ScopeLevel.GROUP, ScopeLevel.EMPLOYEE]


def _put_levels(lock_store, org, levels):
    """Most specific level unlocked, every broader level locked."""
    scope_ids = {
        ScopeLevel.TENANT: org.tenant,
        ScopeLevel.ENVIRONMENT: org.vessel,
        ScopeLevel.GROUP: org.deck,
        ScopeLevel.EMPLOYEE: org.alice,
    }
    most_specific = max(levels, key=ALL_LEVELS.index)
    for level in levels:
        lock_store.put(
            org.tenant, level, scope_ids[level], MONTH, locked=level is not most_specific, reason=level.value
        )


@pytest.mark.parametrize(
    "order",
    [
        ALL_LEVELS,
        list(reversed(ALL_LEVELS)),
        [ScopeLevel.GROUP, ScopeLevel.TENANT, ScopeLevel.EMPLOYEE, ScopeLevel.ENVIRONMENT],
        [ScopeLevel.ENVIRONMENT, ScopeLevel.EMPLOYEE, ScopeLevel.TENANT, ScopeLevel.GROUP],
    ],
)
async def test_employee_override_wins_over_all_levels(lock_resolver, lock_store, org, order):
    _put_levels(lock_store, org, order)
    effective = await lock_resolver.resolve_effective_lock(org.tenant, org.alice, MONTH)
    assert effective.locked is False
    assert effective.source_level is LockSource.EMPLOYEE


@pytest.mark.parametrize(
    "levels, source",
    [
        ([ScopeLevel.GROUP, ScopeLevel.TENANT, ScopeLevel.ENVIRONMENT], LockSource.GROUP),
        ([ScopeLevel.TENANT, ScopeLevel.ENVIRONMENT], LockSource.ENVIRONMENT),
        ([ScopeLevel.ENVIRONMENT, ScopeLevel.TENANT], LockSource.ENVIRONMENT),
    ],
)
async def test_most_specific_present_level_decides(lock_resolver, lock_store, org, levels, source):
    _put_levels(lock_store, org, levels)
    effective = await lock_resolver.resolve_effective_lock(org.tenant, org.alice, MONTH)
    assert effective.locked is False
    assert effective.source_level is source


async def test_any_locked_group_closes_the_period(lock_resolver, lock_store, org):
    lock_store.put(org.tenant, ScopeLevel.GROUP, org.deck, MONTH, locked=False)
    lock_store.put(org.tenant, ScopeLevel.GROUP, org.engine, MONTH, locked=True, reason="engine audit")
    effective = await lock_resolver.resolve_effective_lock(org.tenant, org.bob, MONTH)
    assert effective.locked is True
    assert effective.source_level is LockSource.GROUP
    assert effective.reason == "engine audit"


async def test_multi_group_result_is_deterministic(lock_resolver, lock_store, org):
    lock_store.put(org.tenant, ScopeLevel.GROUP, org.engine, MONTH, locked=True, reason="engine")
    lock_store.put(org.tenant, ScopeLevel.GROUP, org.deck, MONTH, locked=True, reason="deck")
    first = await lock_resolver.resolve_effective_lock(org.tenant, org.bob, MONTH)
    second = await lock_resolver.resolve_effective_lock(org.tenant, org.bob, MONTH)
    assert first == second
    assert first.reason == "deck"


async def test_other_months_do_not_apply(lock_resolver, lock_store, org):
    lock_store.put(org.tenant, ScopeLevel.TENANT, org.tenant, "2024-12", locked=True)
    effective = await lock_resolver.resolve_effective_lock(org.tenant, org.alice, "2025-01-15")
    assert effective.locked is False


async def test_same_group_id_in_other_tenant_is_ignored(lock_resolver, lock_store, org):
    lock_store.put(org.other_tenant, ScopeLevel.GROUP, org.deck, MONTH, locked=True)
    effective = await lock_resolver.resolve_effective_lock(org.tenant, org.alice, MONTH)
    assert effective.locked is False
    assert effective.source_level is LockSource.NONE


async def test_record_from_another_tenant_fails_closed(lock_resolver, lock_store, org):
    # Simulates a store that ignores the tenant key and hands back a foreign record.
    month = normalize_period_month(MONTH)
    lock_store.records[(org.tenant, "employee", org.alice, month)] = PeriodLock(
        tenant_id=org.other_tenant,
        scope_level=ScopeLevel.EMPLOYEE,
        scope_id=org.alice,
        period_month=month,
        locked=False,
    )
    with pytest.raises(LockResolutionFailed):
        await lock_resolver.resolve_effective_lock(org.tenant, org.alice, MONTH)


async def test_store_failure_is_not_unlocked(lock_resolver, lock_store, org):
    lock_store.fail = True
    with pytest.raises(LockResolutionFailed):
        await lock_resolver.resolve_effective_lock(org.tenant, org.alice, MONTH)


async def test_membership_failure_is_not_unlocked(lock_resolver, directory, org):
    directory.fail = True
    with pytest.raises(LockResolutionFailed):
        await lock_resolver.resolve_effective_lock(org.tenant, org.alice, MONTH)


async def test_bad_input_is_invalid_parameter(lock_resolver, org):
    with pytest.raises(InvalidParameterError):
        await lock_resolver.resolve_effective_lock(org.tenant, "", MONTH)
    with pytest.raises(InvalidParameterError):
        await lock_resolver.resolve_effective_lock(org.tenant, org.alice, "2025-02-30")
