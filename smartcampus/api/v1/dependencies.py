"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the caller context and application services.
All services are built from the Firebase REST adapters here; routes depend
only on these dependencies, not on infrastructure directly. Tests replace
the repository/gateway getters through app.dependency_overrides.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from smartcampus.application.dtos.caller import CallerContext
from smartcampus.application.dtos.lifecycle import CleanupResult
from smartcampus.application.interfaces.repositories import (
    IAdminRepository,
    ICampusRepository,
    IRegistrationStore,
)
from smartcampus.application.interfaces.services import (
    IBlobStore,
    IIdentityGateway,
    INotificationService,
    ITokenVerifier,
)
from smartcampus.application.services import (
    AccountMaintenanceService,
    AuthorizationService,
    CascadingDeletionService,
    CleanupService,
    RegistrationService,
    StatusTransitionService,
)
from smartcampus.core.config import get_settings
from smartcampus.domain.exceptions import InternalException, UnauthenticatedException
from smartcampus.infrastructure.firebase.client import (
    get_firestore_client,
    get_identity_client,
    get_project_id,
    get_storage_client,
)
from smartcampus.infrastructure.firebase.repositories import (
    FirestoreAdminRepository,
    FirestoreCampusRepository,
    FirestoreRegistrationStore,
)
from smartcampus.infrastructure.firebase.services import (
    FirebaseBlobStore,
    FirebaseIdentityGateway,
)
from smartcampus.infrastructure.security import FirebaseTokenVerifier, caller_from_claims
from smartcampus.infrastructure.services import create_notification_service

logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)


def _not_configured() -> InternalException:
    return InternalException("Firebase is not configured")


# ---- Infrastructure ports ----


def get_campus_repo() -> ICampusRepository:
    client = get_firestore_client()
    if client is None:
        raise _not_configured()
    return FirestoreCampusRepository(
        client, batch_size=get_settings().recursive_delete_batch_size
    )


def get_admin_repo() -> IAdminRepository:
    client = get_firestore_client()
    if client is None:
        raise _not_configured()
    return FirestoreAdminRepository(client)


def get_registration_store() -> IRegistrationStore:
    client = get_firestore_client()
    if client is None:
        raise _not_configured()
    return FirestoreRegistrationStore(client)


def get_identity_gateway() -> IIdentityGateway:
    client = get_identity_client()
    if client is None:
        raise _not_configured()
    return FirebaseIdentityGateway(client)


def get_blob_store() -> IBlobStore:
    client = get_storage_client()
    if client is None:
        raise _not_configured()
    return FirebaseBlobStore(client)


def get_notification_service() -> INotificationService:
    return create_notification_service(get_settings())


def get_token_verifier() -> ITokenVerifier:
    project_id = get_project_id()
    if project_id is None:
        raise _not_configured()
    return FirebaseTokenVerifier(project_id)


def get_authorization_service() -> AuthorizationService:
    return AuthorizationService(sysadmin_role=get_settings().sysadmin_role)


# ---- Caller ----


async def get_caller(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer)],
) -> CallerContext:
    """Verify the Bearer Firebase ID token and return the caller context."""
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedException("Missing Bearer ID token.")
    verifier = get_token_verifier()
    claims = await verifier.verify(credentials.credentials)
    return caller_from_claims(claims)


# ---- Application services ----


def get_status_transition_service(
    campus_repo: Annotated[ICampusRepository, Depends(get_campus_repo)],
    admin_repo: Annotated[IAdminRepository, Depends(get_admin_repo)],
    identity: Annotated[IIdentityGateway, Depends(get_identity_gateway)],
    authz: Annotated[AuthorizationService, Depends(get_authorization_service)],
) -> StatusTransitionService:
    return StatusTransitionService(
        campus_repo,
        admin_repo,
        identity,
        authz,
        admin_claim_role=get_settings().admin_claim_role,
    )


def get_deletion_service(
    campus_repo: Annotated[ICampusRepository, Depends(get_campus_repo)],
    admin_repo: Annotated[IAdminRepository, Depends(get_admin_repo)],
    identity: Annotated[IIdentityGateway, Depends(get_identity_gateway)],
    blob_store: Annotated[IBlobStore, Depends(get_blob_store)],
    authz: Annotated[AuthorizationService, Depends(get_authorization_service)],
) -> CascadingDeletionService:
    return CascadingDeletionService(
        campus_repo,
        admin_repo,
        identity,
        blob_store,
        authz=authz,
        storage_root_prefix=get_settings().storage_root_prefix,
    )


def get_cleanup_service(
    campus_repo: Annotated[ICampusRepository, Depends(get_campus_repo)],
    admin_repo: Annotated[IAdminRepository, Depends(get_admin_repo)],
    deletion: Annotated[CascadingDeletionService, Depends(get_deletion_service)],
) -> CleanupService:
    return CleanupService(campus_repo, admin_repo, deletion)


def get_registration_service(
    campus_repo: Annotated[ICampusRepository, Depends(get_campus_repo)],
    identity: Annotated[IIdentityGateway, Depends(get_identity_gateway)],
    store: Annotated[IRegistrationStore, Depends(get_registration_store)],
    notifier: Annotated[INotificationService, Depends(get_notification_service)],
) -> RegistrationService:
    return RegistrationService(
        campus_repo,
        identity,
        store,
        notifier,
        notify_recipients=get_settings().notify_recipients,
    )


def get_account_maintenance_service(
    campus_repo: Annotated[ICampusRepository, Depends(get_campus_repo)],
    identity: Annotated[IIdentityGateway, Depends(get_identity_gateway)],
    authz: Annotated[AuthorizationService, Depends(get_authorization_service)],
) -> AccountMaintenanceService:
    return AccountMaintenanceService(campus_repo, identity, authz)


# ---- Outside a request (scheduler, scripts) ----


def build_cleanup_service() -> CleanupService:
    """Build the cleanup service from the initialized Firebase clients."""
    campus_repo = get_campus_repo()
    admin_repo = get_admin_repo()
    deletion = CascadingDeletionService(
        campus_repo,
        admin_repo,
        get_identity_gateway(),
        get_blob_store(),
        storage_root_prefix=get_settings().storage_root_prefix,
    )
    return CleanupService(campus_repo, admin_repo, deletion)


async def run_cleanup_rejected() -> CleanupResult:
    """One cleanup sweep; used by the weekly scheduler and scripts/run_cleanup_rejected.py."""
    result = await build_cleanup_service().cleanup_rejected()
    logger.info(
        "Cleanup of rejected entities finished: %s admins, %s campuses (%s cascaded)",
        result.deleted_admins,
        result.deleted_campuses,
        result.cascaded_campuses,
    )
    return result
