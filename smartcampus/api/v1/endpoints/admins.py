"""Admin API: status changes and cascading deletion (sysadmin only)."""

from typing import Annotated

from fastapi import APIRouter, Depends

from smartcampus.api.v1.dependencies import (
    get_caller,
    get_deletion_service,
    get_status_transition_service,
)
from smartcampus.application.dtos.caller import CallerContext
from smartcampus.application.services import (
    CascadingDeletionService,
    StatusTransitionService,
)
from smartcampus.schemas.lifecycle import (
    DeletionResponse,
    NewStatusRequest,
    StatusChangeResponse,
)

router = APIRouter()


@router.post("/{admin_id}/status", response_model=StatusChangeResponse)
async def set_admin_status(
    admin_id: str,
    body: NewStatusRequest,
    caller: Annotated[CallerContext, Depends(get_caller)],
    svc: Annotated[StatusTransitionService, Depends(get_status_transition_service)],
):
    """Move an admin between pending, active and reject and sync its claims."""
    result = await svc.set_admin_status(admin_id, body.new_status, caller)
    return StatusChangeResponse.from_result(result)


@router.delete("/{admin_id}", response_model=DeletionResponse)
async def delete_admin(
    admin_id: str,
    caller: Annotated[CallerContext, Depends(get_caller)],
    svc: Annotated[CascadingDeletionService, Depends(get_deletion_service)],
):
    """Delete an admin (account, profile, files); deletes the campus if it is left empty."""
    result = await svc.delete_admin_for_caller(admin_id, caller)
    return DeletionResponse.for_admin(result)
