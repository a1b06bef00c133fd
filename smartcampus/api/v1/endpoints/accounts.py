"""Account API: email existence check and sysadmin maintenance tools.

reset-password and claims accept GET (query string) as well as POST (JSON body)
so they can be triggered from a browser by a signed-in sysadmin.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from smartcampus.api.v1.dependencies import get_account_maintenance_service, get_caller
from smartcampus.application.dtos.caller import CallerContext
from smartcampus.application.services import AccountMaintenanceService
from smartcampus.core.limiter import limit_public
from smartcampus.schemas.account import (
    EmailExistsRequest,
    ExistsResponse,
    ManualClaimsRequest,
    ManualClaimsResponse,
    ResetPasswordRequest,
    ResetPasswordResponse,
)

router = APIRouter()

MaintenanceService = Annotated[
    AccountMaintenanceService, Depends(get_account_maintenance_service)
]
Caller = Annotated[CallerContext, Depends(get_caller)]


@router.post("/email-exists", response_model=ExistsResponse)
@limit_public
async def check_email_exists(
    request: Request,
    body: EmailExistsRequest,
    svc: MaintenanceService,
):
    return ExistsResponse(exists=await svc.check_email_exists(body.email))


async def _reset_password(
    svc: AccountMaintenanceService, body: ResetPasswordRequest, caller: CallerContext
) -> ResetPasswordResponse:
    message = await svc.reset_user_password(body.email, body.new_password, caller)
    return ResetPasswordResponse(message=message)


@router.get("/reset-password", response_model=ResetPasswordResponse)
async def reset_password_get(
    caller: Caller,
    svc: MaintenanceService,
    email: str | None = None,
    new_password: Annotated[str | None, Query(alias="newPassword")] = None,
):
    return await _reset_password(
        svc, ResetPasswordRequest(email=email, new_password=new_password), caller
    )


@router.post("/reset-password", response_model=ResetPasswordResponse)
async def reset_password_post(
    body: ResetPasswordRequest,
    caller: Caller,
    svc: MaintenanceService,
):
    return await _reset_password(svc, body, caller)


async def _set_claims(
    svc: AccountMaintenanceService, body: ManualClaimsRequest, caller: CallerContext
) -> ManualClaimsResponse:
    claims = await svc.set_manual_claims(
        body.email, body.campus_id, caller, role=body.role
    )
    return ManualClaimsResponse(email=body.email or "", claims=claims)


@router.get("/claims", response_model=ManualClaimsResponse)
async def set_claims_get(
    caller: Caller,
    svc: MaintenanceService,
    email: str | None = None,
    campus_id: Annotated[str | None, Query(alias="campusId")] = None,
    role: str | None = None,
):
    return await _set_claims(
        svc, ManualClaimsRequest(email=email, campus_id=campus_id, role=role), caller
    )


@router.post("/claims", response_model=ManualClaimsResponse)
async def set_claims_post(
    body: ManualClaimsRequest,
    caller: Caller,
    svc: MaintenanceService,
):
    return await _set_claims(svc, body, caller)
