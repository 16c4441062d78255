"""
Chaos: membership or lock store unavailable mid-request.
System must fail closed: never widen scope, never report a period as open.
"""

import pytest

from timesheet_access.domain.models.access import DenialReason
from timesheet_access.domain.models.period_lock import ScopeLevel
from timesheet_access.periods.exceptions import LockResolutionFailed


async def test_membership_outage_denies_manager_everything(access_validator, directory, org):
    directory.fail = True
    for target in (None, org.alice, org.carol):
        decision = await access_validator.validate_access(org.manager_user, "MANAGER", org.tenant, target)
        assert decision.allowed is False
        assert decision.reason is DenialReason.SCOPE_RESOLUTION_FAILED
        assert decision.resolved_employee_set == frozenset()


async def test_outage_during_employee_lookup_fails_lock_resolution(lock_resolver, directory, lock_store, org):
    lock_store.put(org.tenant, ScopeLevel.TENANT, org.tenant, "2025-01")
    directory.fail = True
    with pytest.raises(LockResolutionFailed):
        await lock_resolver.resolve_effective_lock(org.tenant, org.alice, "2025-01")


async def test_lock_outage_never_allows_non_admin_edit(edit_gate, lock_store, org):
    lock_store.fail = True
    for actor, role, employee in (
        (org.manager_user, "MANAGER", org.alice),
        (org.alice_user, "USER", org.alice),
        (org.admin_user, "TENANT_ADMIN", org.carol),
    ):
        result = await edit_gate.authorize_entry_edit(
            actor, role, org.tenant, "ts-1", employee, "2025-01", justification="a long enough reason"
        )
        assert result.allowed is False
        assert result.error == "lock-resolution-failed"


async def test_recovery_after_outage(edit_gate, lock_store, org):
    lock_store.fail = True
    first = await edit_gate.authorize_entry_edit(org.alice_user, "USER", org.tenant, "ts-1", org.alice, "2025-01")
    lock_store.fail = False
    second = await edit_gate.authorize_entry_edit(org.alice_user, "USER", org.tenant, "ts-1", org.alice, "2025-01")
    assert first.allowed is False
    assert second.allowed is True
