"""Application services: authorization, status lifecycle, deletion, cleanup, registration."""

from smartcampus.application.services.account_maintenance_service import (
    AccountMaintenanceService,
)
from smartcampus.application.services.authorization_service import AuthorizationService
from smartcampus.application.services.cascading_deletion_service import (
    CascadingDeletionService,
)
from smartcampus.application.services.cleanup_service import CleanupService
from smartcampus.application.services.registration_service import RegistrationService
from smartcampus.application.services.status_transition_service import (
    StatusTransitionService,
    parse_requested_status,
)

__all__ = [
    "AccountMaintenanceService",
    "AuthorizationService",
    "CascadingDeletionService",
    "CleanupService",
    "RegistrationService",
    "StatusTransitionService",
    "parse_requested_status",
]
