"""Period lock router: effective lock lookup and lock administration."""

from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from timesheet_access.api.dependencies import (
    Actor,
    get_access_service,
    get_actor,
    get_correlation_id,
    get_lock_resolver,
    get_period_lock_service,
    get_tenant_id,
)
from timesheet_access.api.responses import status_for_denial
from timesheet_access.application.access_service import AccessService
from timesheet_access.domain.schemas.access import AccessDecisionResponse
from timesheet_access.domain.schemas.period_lock import (
    EffectiveLockResponse,
    PeriodLockResponse,
    SetLockRequest,
)
from timesheet_access.periods.lock_resolver import LockResolver
from timesheet_access.periods.lock_service import PeriodLockService
from timesheet_access.periods.months import normalize_period_month

router = APIRouter()


@router.get("/effective", response_model=EffectiveLockResponse)
async def get_effective_lock(
    request: Request,
    employee_id: Annotated[str, Query(min_length=1)],
    period_month: Annotated[str, Query(min_length=7)],
    actor: Annotated[Actor, Depends(get_actor)],
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    correlation_id: Annotated[str, Depends(get_correlation_id)],
    access_service: Annotated[AccessService, Depends(get_access_service)],
    resolver: Annotated[LockResolver, Depends(get_lock_resolver)],
):
    """Effective lock for one employee and month. The actor must be allowed to see the employee."""
    month = normalize_period_month(period_month)
    result = await access_service.check_access(
        actor_id=actor.actor_id,
        role=actor.role,
        tenant_id=tenant_id,
        params={"employee_id": employee_id},
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
        correlation_id=correlation_id,
    )
    if not result.decision.allowed:
        body = AccessDecisionResponse.from_decision(result.decision)
        return JSONResponse(
            status_code=status_for_denial(body.reason.value if body.reason else None),
            content=body.model_dump(mode="json"),
        )
    effective = await resolver.resolve_effective_lock(tenant_id, employee_id, month)
    return EffectiveLockResponse.from_effective(employee_id, month, effective)


@router.get("", response_model=List[PeriodLockResponse])
async def list_locks(
    actor: Annotated[Actor, Depends(get_actor)],
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    service: Annotated[PeriodLockService, Depends(get_period_lock_service)],
    scope_level: Optional[str] = None,
    period_month: Optional[str] = None,
):
    """Lock records of the tenant, newest month first. Lock administrators only."""
    locks = await service.list_locks(
        role=actor.role,
        tenant_id=tenant_id,
        scope_level=scope_level,
        period_month=period_month,
    )
    return [PeriodLockResponse.from_lock(lock) for lock in locks]


@router.put("", response_model=PeriodLockResponse)
async def set_lock(
    body: SetLockRequest,
    actor: Annotated[Actor, Depends(get_actor)],
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    correlation_id: Annotated[str, Depends(get_correlation_id)],
    service: Annotated[PeriodLockService, Depends(get_period_lock_service)],
):
    """Create or replace a lock record at any scope level."""
    lock = await service.set_lock(
        actor_id=actor.actor_id,
        role=actor.role,
        tenant_id=tenant_id,
        scope_level=body.scope_level,
        scope_id=body.scope_id,
        period_month=body.period_month,
        locked=body.locked,
        reason=body.reason,
        correlation_id=correlation_id,
    )
    return PeriodLockResponse.from_lock(lock)
