"""Manager scope: the employees a manager may act on within one tenant. Pure read."""

import logging
from typing import FrozenSet

from timesheet_access.domain.stores import GroupMembershipStore
from timesheet_access.domain.validators.parameter_validator import require_identifier
from timesheet_access.security.exceptions import ScopeResolutionFailed, TenantIsolationError
from timesheet_access.security.tenant_context import TenantContext

logger = logging.getLogger(__name__)


class ScopeResolver:
    """
    Computes manager scope as in-process set algebra over two small store reads:
    groups assigned to the manager, then members of any of those groups (union).
    Holds no state between calls.
    """

    def __init__(self, membership_store: GroupMembershipStore) -> None:
        self._store = membership_store

    async def resolve_manager_scope(self, manager_id: str, tenant_id: str) -> FrozenSet[str]:
        """
        Return the deduplicated union of employees in every group assigned to the manager.
        Empty when the manager has no assignments. Raises InvalidParameterError on empty
        ids and ScopeResolutionFailed on any store error or cross-tenant record.
        """
        manager_id = require_identifier(manager_id, "manager_id")
        tenant_id = require_identifier(tenant_id, "tenant_id")

        try:
            groups = await self._store.list_groups_for_manager(tenant_id, manager_id)
            groups = TenantContext.ensure_same_tenant(groups, tenant_id)
            group_ids = sorted({g.group_id for g in groups})
            if not group_ids:
                logger.info(
                    "scope_resolved",
                    extra={"manager_id": manager_id, "group_count": 0, "employee_count": 0},
                )
                return frozenset()
            employee_ids = await self._store.list_employees_in_groups(tenant_id, group_ids)
        except TenantIsolationError as e:
            logger.error(
                "scope_resolution_failed",
                extra={"manager_id": manager_id, "error": e.message},
            )
            raise ScopeResolutionFailed(f"Scope resolution failed: {e.message}") from e
        except Exception as e:
            logger.error(
                "scope_resolution_failed",
                extra={"manager_id": manager_id, "error": str(e)},
            )
            raise ScopeResolutionFailed(f"Scope resolution failed: {e}") from e

        scope = frozenset(emp for emp in employee_ids if emp)
        logger.info(
            "scope_resolved",
            extra={
                "manager_id": manager_id,
                "group_count": len(group_ids),
                "employee_count": len(scope),
            },
        )
        return scope
