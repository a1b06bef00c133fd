"""Existence checks and sysadmin account maintenance schemas."""

from smartcampus.schemas.base import CamelModel


class CampusExistsRequest(CamelModel):
    name: str | None = None


class EmailExistsRequest(CamelModel):
    email: str | None = None


class ExistsResponse(CamelModel):
    exists: bool


class ResetPasswordRequest(CamelModel):
    email: str | None = None
    new_password: str | None = None


class ResetPasswordResponse(CamelModel):
    success: bool = True
    message: str


class ManualClaimsRequest(CamelModel):
    email: str | None = None
    campus_id: str | None = None
    role: str | None = None


class ManualClaimsResponse(CamelModel):
    success: bool = True
    email: str
    claims: dict[str, str]
