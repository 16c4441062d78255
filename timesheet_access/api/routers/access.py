"""Access API router: POST /access/validate, GET /access/scope."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from timesheet_access.api.dependencies import (
    Actor,
    get_access_service,
    get_actor,
    get_correlation_id,
    get_tenant_id,
)
from timesheet_access.api.responses import status_for_denial
from timesheet_access.application.access_service import AccessCheckResult, AccessService
from timesheet_access.domain.schemas.access import AccessCheckRequest, AccessDecisionResponse

router = APIRouter()


def _to_response(result: AccessCheckResult) -> JSONResponse:
    body = AccessDecisionResponse.from_decision(result.decision, result.sanitized)
    status_code = 200
    if not result.decision.allowed:
        status_code = status_for_denial(body.reason.value if body.reason else None)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


@router.post("/validate", response_model=AccessDecisionResponse)
async def validate_access(
    request: Request,
    body: AccessCheckRequest,
    actor: Annotated[Actor, Depends(get_actor)],
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    correlation_id: Annotated[str, Depends(get_correlation_id)],
    service: Annotated[AccessService, Depends(get_access_service)],
):
    """Validate report parameters and decide whether the actor may see the requested data."""
    result = await service.check_access(
        actor_id=actor.actor_id,
        role=actor.role,
        tenant_id=tenant_id,
        params=body.params,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
        correlation_id=correlation_id,
    )
    return _to_response(result)


@router.get("/scope", response_model=AccessDecisionResponse)
async def get_scope(
    request: Request,
    actor: Annotated[Actor, Depends(get_actor)],
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    correlation_id: Annotated[str, Depends(get_correlation_id)],
    service: Annotated[AccessService, Depends(get_access_service)],
):
    """Employees the actor may see: own record, the manager's group members, or all (admins)."""
    result = await service.check_access(
        actor_id=actor.actor_id,
        role=actor.role,
        tenant_id=tenant_id,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
        correlation_id=correlation_id,
    )
    return _to_response(result)
