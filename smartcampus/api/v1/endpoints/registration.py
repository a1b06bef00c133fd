"""Registration API: new campus requests and requests to manage an existing campus.

Both are open (no token) and rate limited; created entities start pending.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from smartcampus.api.v1.dependencies import get_registration_service
from smartcampus.application.services import RegistrationService
from smartcampus.core.limiter import limit_registration
from smartcampus.schemas.registration import (
    CampusRegistrationRequest,
    ManageRequestBody,
    RegistrationResponse,
)

router = APIRouter()


@router.post("/campus", response_model=RegistrationResponse, status_code=201)
@limit_registration
async def register_campus(
    request: Request,
    body: CampusRegistrationRequest,
    svc: Annotated[RegistrationService, Depends(get_registration_service)],
):
    result = await svc.register_campus(body.to_dto())
    return RegistrationResponse(
        message="Campus registration submitted for review.",
        admin_id=result.admin_id,
        campus_id=result.campus_id,
    )


@router.post("/request-manage", response_model=RegistrationResponse, status_code=201)
@limit_registration
async def request_manage(
    request: Request,
    body: ManageRequestBody,
    svc: Annotated[RegistrationService, Depends(get_registration_service)],
):
    result = await svc.request_manage(body.to_dto())
    return RegistrationResponse(
        message="Request to manage campus submitted for review.",
        admin_id=result.admin_id,
        campus_id=result.campus_id,
    )
