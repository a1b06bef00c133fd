"""Request/response schemas for the HTTP API (camelCase JSON)."""

from smartcampus.schemas.account import (
    CampusExistsRequest,
    EmailExistsRequest,
    ExistsResponse,
    ManualClaimsRequest,
    ManualClaimsResponse,
    ResetPasswordRequest,
    ResetPasswordResponse,
)
from smartcampus.schemas.health import HealthResponse
from smartcampus.schemas.lifecycle import (
    CleanupResponse,
    DeletionResponse,
    NewStatusRequest,
    StatusChangeResponse,
)
from smartcampus.schemas.registration import (
    CampusRegistrationRequest,
    ManageRequestBody,
    RegistrationResponse,
)

__all__ = [
    "CampusExistsRequest",
    "CampusRegistrationRequest",
    "CleanupResponse",
    "DeletionResponse",
    "EmailExistsRequest",
    "ExistsResponse",
    "HealthResponse",
    "ManageRequestBody",
    "ManualClaimsRequest",
    "ManualClaimsResponse",
    "NewStatusRequest",
    "RegistrationResponse",
    "ResetPasswordRequest",
    "ResetPasswordResponse",
    "StatusChangeResponse",
]
