"""Campus API: existence check, status changes and cascading deletion."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from smartcampus.api.v1.dependencies import (
    get_account_maintenance_service,
    get_caller,
    get_deletion_service,
    get_status_transition_service,
)
from smartcampus.application.dtos.caller import CallerContext
from smartcampus.application.services import (
    AccountMaintenanceService,
    CascadingDeletionService,
    StatusTransitionService,
)
from smartcampus.core.limiter import limit_public
from smartcampus.schemas.account import CampusExistsRequest, ExistsResponse
from smartcampus.schemas.lifecycle import (
    DeletionResponse,
    NewStatusRequest,
    StatusChangeResponse,
)

router = APIRouter()


# Declared before /{campus_id} routes so "exists" is never taken as an id.
@router.post("/exists", response_model=ExistsResponse)
@limit_public
async def check_campus_exists(
    request: Request,
    body: CampusExistsRequest,
    svc: Annotated[AccountMaintenanceService, Depends(get_account_maintenance_service)],
):
    return ExistsResponse(exists=await svc.check_campus_exists(body.name))


@router.post("/{campus_id}/status", response_model=StatusChangeResponse)
async def set_campus_status(
    campus_id: str,
    body: NewStatusRequest,
    caller: Annotated[CallerContext, Depends(get_caller)],
    svc: Annotated[StatusTransitionService, Depends(get_status_transition_service)],
):
    """Change a campus status and cascade claims to its admins."""
    result = await svc.set_campus_status(campus_id, body.new_status, caller)
    return StatusChangeResponse.from_result(result)


@router.delete("/{campus_id}", response_model=DeletionResponse)
async def delete_campus(
    campus_id: str,
    caller: Annotated[CallerContext, Depends(get_caller)],
    svc: Annotated[CascadingDeletionService, Depends(get_deletion_service)],
):
    """Delete a campus with all its admins, subcollections and stored files."""
    result = await svc.delete_campus_for_caller(campus_id, caller)
    return DeletionResponse.for_campus(result)
