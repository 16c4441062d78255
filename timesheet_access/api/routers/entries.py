"""Timesheet entry router: POST /timesheets/{timesheet_id}/entries/{entry_id}/authorize-edit."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from timesheet_access.api.dependencies import (
    Actor,
    get_actor,
    get_correlation_id,
    get_entry_edit_service,
    get_tenant_id,
)
from timesheet_access.api.responses import status_for_denial
from timesheet_access.application.edit_gate import EditIntent
from timesheet_access.application.entry_edit_service import EntryEditService
from timesheet_access.domain.schemas.entry_edit import EditAuthorizationResponse, EntryEditRequest

router = APIRouter()


@router.post(
    "/{timesheet_id}/entries/{entry_id}/authorize-edit",
    response_model=EditAuthorizationResponse,
)
async def authorize_entry_edit(
    request: Request,
    timesheet_id: str,
    entry_id: str,
    body: EntryEditRequest,
    actor: Annotated[Actor, Depends(get_actor)],
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    correlation_id: Annotated[str, Depends(get_correlation_id)],
    service: Annotated[EntryEditService, Depends(get_entry_edit_service)],
):
    """
    Decide whether the actor may update or delete the entry. The entry itself is stored by
    the timesheet service; this endpoint only authorizes, audits and notifies.
    """
    result = await service.authorize_edit(
        actor_id=actor.actor_id,
        role=actor.role,
        tenant_id=tenant_id,
        timesheet_id=timesheet_id,
        entry_id=entry_id,
        employee_id=body.employee_id,
        period_month=body.period_month,
        justification=body.justification,
        intent=EditIntent(body.intent),
        changes=body.changes,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
        correlation_id=correlation_id,
    )
    response = EditAuthorizationResponse.from_authorization(result)
    status_code = 200 if result.allowed else status_for_denial(result.error)
    return JSONResponse(status_code=status_code, content=response.model_dump(mode="json"))
