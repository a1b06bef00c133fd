"""Maintenance API: manual trigger of the rejected-entity cleanup sweep."""

from typing import Annotated

from fastapi import APIRouter, Depends

from smartcampus.api.v1.dependencies import (
    get_authorization_service,
    get_caller,
    get_cleanup_service,
)
from smartcampus.application.dtos.caller import CallerContext
from smartcampus.application.services import AuthorizationService, CleanupService
from smartcampus.schemas.lifecycle import CleanupResponse

router = APIRouter()


@router.post("/cleanup-rejected", response_model=CleanupResponse)
async def cleanup_rejected(
    caller: Annotated[CallerContext, Depends(get_caller)],
    authz: Annotated[AuthorizationService, Depends(get_authorization_service)],
    svc: Annotated[CleanupService, Depends(get_cleanup_service)],
):
    """Delete every rejected admin and rejected campus now (same sweep as the weekly job)."""
    authz.require_sysadmin(caller)
    result = await svc.cleanup_rejected()
    return CleanupResponse.from_result(result)
