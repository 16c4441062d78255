"""DB-backed membership store and employee directory. Every query filters on tenant_id."""

from typing import List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from timesheet_access.domain.models.membership import Group
from timesheet_access.domain.models.period_lock import ScopeLevel
from timesheet_access.infrastructure.database.models import Employee
from timesheet_access.infrastructure.database.models import Environment
from timesheet_access.infrastructure.database.models import EmployeeGroupMember
from timesheet_access.infrastructure.database.models import Group as GroupRow
from timesheet_access.infrastructure.database.models import ManagerGroupAssignment

_ENTITY_MODELS = {
    ScopeLevel.ENVIRONMENT: Environment,
    ScopeLevel.GROUP: GroupRow,
    ScopeLevel.EMPLOYEE: Employee,
}


def _to_group(row: GroupRow) -> Group:
    return Group(
        group_id=row.id,
        tenant_id=row.tenant_id,
        name=row.name or "",
        environment_id=row.environment_id,
    )


class DbGroupMembershipStore:
    """Implements GroupMembershipStore and EmployeeDirectory over the membership tables."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_groups_for_manager(self, tenant_id: str, manager_id: str) -> List[Group]:
        stmt = (
            select(GroupRow)
            .join(ManagerGroupAssignment, ManagerGroupAssignment.group_id == GroupRow.id)
            .where(
                ManagerGroupAssignment.tenant_id == tenant_id,
                ManagerGroupAssignment.manager_id == manager_id,
                GroupRow.tenant_id == tenant_id,
            )
            .order_by(GroupRow.id)
        )
        result = await self._session.execute(stmt)
        return [_to_group(row) for row in result.scalars().all()]

    async def list_employees_in_groups(
        self, tenant_id: str, group_ids: Sequence[str]
    ) -> List[str]:
        if not group_ids:
            return []
        stmt = (
            select(EmployeeGroupMember.employee_id)
            .where(
                EmployeeGroupMember.tenant_id == tenant_id,
                EmployeeGroupMember.group_id.in_(list(group_ids)),
            )
            .distinct()
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def list_groups_for_employee(self, tenant_id: str, employee_id: str) -> List[Group]:
        stmt = (
            select(GroupRow)
            .join(EmployeeGroupMember, EmployeeGroupMember.group_id == GroupRow.id)
            .where(
                EmployeeGroupMember.tenant_id == tenant_id,
                EmployeeGroupMember.employee_id == employee_id,
                GroupRow.tenant_id == tenant_id,
            )
            .order_by(GroupRow.id)
        )
        result = await self._session.execute(stmt)
        return [_to_group(row) for row in result.scalars().all()]

    async def get_employee_id_for_user(self, tenant_id: str, user_id: str) -> Optional[str]:
        stmt = select(Employee.id).where(
            Employee.tenant_id == tenant_id,
            Employee.profile_user_id == user_id,
        )
        result = await self._session.execute(stmt)
        return result.scalars().first()

    async def get_entity_tenant(self, scope_level: ScopeLevel, entity_id: str) -> Optional[str]:
        level = ScopeLevel(scope_level)
        if level is ScopeLevel.TENANT:
            return entity_id
        model = _ENTITY_MODELS[level]
        result = await self._session.execute(select(model.tenant_id).where(model.id == entity_id))
        return result.scalar_one_or_none()
