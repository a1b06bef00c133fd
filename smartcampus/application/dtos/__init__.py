"""Application DTOs: read models, caller context, and operation results."""

from smartcampus.application.dtos.admin import AdminResult
from smartcampus.application.dtos.caller import CallerContext
from smartcampus.application.dtos.campus import CampusResult
from smartcampus.application.dtos.lifecycle import (
    CleanupResult,
    DeletionResult,
    StatusChangeResult,
    StepResult,
)
from smartcampus.application.dtos.registration import (
    CampusRegistration,
    ManageRequest,
    RegistrationResult,
)

__all__ = [
    "AdminResult",
    "CallerContext",
    "CampusRegistration",
    "CampusResult",
    "CleanupResult",
    "DeletionResult",
    "ManageRequest",
    "RegistrationResult",
    "StatusChangeResult",
    "StepResult",
]
