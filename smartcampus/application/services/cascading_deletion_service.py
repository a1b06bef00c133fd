"""Cascading deletion of admins and campuses across documents, identity, and blobs.

Identity-account deletion is best effort: a failure is recorded and logged,
never raised. Document writes and blob deletion are required and propagate.
"""

from __future__ import annotations

import logging

from smartcampus.application.dtos.caller import CallerContext
from smartcampus.application.dtos.lifecycle import DeletionResult, StepResult
from smartcampus.application.interfaces.repositories import (
    IAdminRepository,
    ICampusRepository,
)
from smartcampus.application.interfaces.services import IBlobStore, IIdentityGateway
from smartcampus.application.services.authorization_service import AuthorizationService
from smartcampus.domain.entities.campus import admin_blob_prefix, campus_blob_prefix
from smartcampus.domain.enums import StepOutcome
from smartcampus.domain.exceptions import (
    FailedPreconditionException,
    InvalidArgumentException,
    ResourceNotFoundException,
    SelfDeletionException,
    SmartCampusException,
)
from smartcampus.shared.telemetry.tracing import traced

logger = logging.getLogger(__name__)


class CascadingDeletionService:
    """Deletes admins and campuses together with everything that hangs off them."""

    def __init__(
        self,
        campus_repo: ICampusRepository,
        admin_repo: IAdminRepository,
        identity: IIdentityGateway,
        blob_store: IBlobStore,
        authz: AuthorizationService | None = None,
        storage_root_prefix: str = "campuses",
    ) -> None:
        self.campus_repo = campus_repo
        self.admin_repo = admin_repo
        self.identity = identity
        self.blob_store = blob_store
        self.authz = authz or AuthorizationService()
        self.storage_root_prefix = storage_root_prefix

    async def _delete_account(self, email: str) -> StepResult:
        """Best-effort identity deletion by email; never raises."""
        if not email:
            return StepResult("account", StepOutcome.SKIPPED_NOT_FOUND, "no email")
        try:
            uid = await self.identity.get_uid_by_email(email)
            if uid is None or not await self.identity.delete_user(uid):
                return StepResult("account", StepOutcome.SKIPPED_NOT_FOUND, email)
        except SmartCampusException as e:
            logger.warning("Failed to delete identity account %s: %s", email, e.message)
            return StepResult("account", StepOutcome.FAILED, e.message)
        return StepResult("account", StepOutcome.APPLIED, email)

    @traced("deletion.delete_admin")
    async def delete_admin(self, admin_id: str) -> DeletionResult:
        """Delete one admin: account, document, per-admin blobs, campus membership.

        When the admin was a member of its campus and was the last one, the
        campus is deleted as well.
        """
        admin = await self.admin_repo.get_by_id(admin_id)
        if admin is None:
            return DeletionResult(entity_id=admin_id, deleted=False)

        steps = [await self._delete_account(admin.email)]
        await self.admin_repo.delete(admin_id)
        steps.append(StepResult("admin_document", StepOutcome.APPLIED))

        blobs_deleted = 0
        campus_deleted = False
        campus = (
            await self.campus_repo.get_by_id(admin.campus_id)
            if admin.campus_id
            else None
        )
        if campus is None:
            steps.append(
                StepResult("campus", StepOutcome.SKIPPED_NOT_FOUND, admin.campus_id)
            )
        else:
            blobs_deleted = await self.blob_store.delete_prefix(
                admin_blob_prefix(self.storage_root_prefix, campus.blob_root(), admin_id)
            )
            steps.append(
                StepResult("blobs", StepOutcome.APPLIED, f"{blobs_deleted} object(s)")
            )
            was_member = admin_id in campus.admin_ids
            remaining = await self.campus_repo.remove_admin(campus.id, admin_id)
            steps.append(StepResult("campus_membership", StepOutcome.APPLIED, campus.id))
            if was_member and remaining is not None and not remaining:
                logger.info(
                    "Admin %s was the last admin of campus %s; deleting campus",
                    admin_id,
                    campus.id,
                )
                cascade = await self.delete_campus(campus.id)
                campus_deleted = cascade.deleted
                blobs_deleted += cascade.blobs_deleted
                steps.extend(cascade.steps)

        logger.info(
            "Deleted admin %s (campus deleted: %s)", admin_id, campus_deleted
        )
        return DeletionResult(
            entity_id=admin_id,
            deleted=True,
            campus_deleted=campus_deleted,
            blobs_deleted=blobs_deleted,
            steps=tuple(steps),
        )

    @traced("deletion.delete_campus")
    async def delete_campus(self, campus_id: str) -> DeletionResult:
        """Delete a campus: all its admins (account + document), its subtree, its blobs."""
        campus = await self.campus_repo.get_by_id(campus_id)
        if campus is None:
            return DeletionResult(entity_id=campus_id, deleted=False)

        steps: list[StepResult] = []
        for admin_id in campus.admin_ids:
            admin = await self.admin_repo.get_by_id(admin_id)
            if admin is None:
                steps.append(
                    StepResult(f"admin:{admin_id}", StepOutcome.SKIPPED_NOT_FOUND)
                )
                continue
            account = await self._delete_account(admin.email)
            steps.append(
                StepResult(f"account:{admin_id}", account.outcome, account.detail)
            )
            await self.admin_repo.delete(admin_id)
            steps.append(StepResult(f"admin:{admin_id}", StepOutcome.APPLIED))

        documents = await self.campus_repo.delete_recursive(campus_id)
        steps.append(
            StepResult("campus_documents", StepOutcome.APPLIED, f"{documents} document(s)")
        )
        blobs_deleted = await self.blob_store.delete_prefix(
            campus_blob_prefix(self.storage_root_prefix, campus.blob_root())
        )
        steps.append(
            StepResult("blobs", StepOutcome.APPLIED, f"{blobs_deleted} object(s)")
        )
        logger.info(
            "Deleted campus %s (%d admin(s), %d object(s))",
            campus_id,
            len(campus.admin_ids),
            blobs_deleted,
        )
        return DeletionResult(
            entity_id=campus_id,
            deleted=True,
            blobs_deleted=blobs_deleted,
            steps=tuple(steps),
        )

    async def delete_admin_for_caller(
        self, admin_id: str, caller: CallerContext | None
    ) -> DeletionResult:
        """Sysadmin-only admin deletion with the request-level preconditions.

        Raises InvalidArgument (no id), NotFound (no admin), FailedPrecondition
        (malformed admin or the caller's own profile) before any mutation.
        """
        caller = self.authz.require_sysadmin(caller)
        if not admin_id:
            raise InvalidArgumentException("adminId is required.", field="adminId")
        admin = await self.admin_repo.get_by_id(admin_id)
        if admin is None:
            raise ResourceNotFoundException("admin", admin_id)
        if not admin.email or not admin.campus_id:
            raise FailedPreconditionException(
                "Admin document is missing required fields.", admin_id=admin_id
            )
        if caller.email and admin.email.lower() == caller.email.lower():
            raise SelfDeletionException(admin_id)
        result = await self.delete_admin(admin_id)
        if not result.deleted:
            raise ResourceNotFoundException("admin", admin_id)
        return result

    async def delete_campus_for_caller(
        self, campus_id: str, caller: CallerContext | None
    ) -> DeletionResult:
        """Sysadmin-only campus deletion; NotFound when the campus is absent."""
        self.authz.require_sysadmin(caller)
        if not campus_id:
            raise InvalidArgumentException("campusId is required.", field="campusId")
        result = await self.delete_campus(campus_id)
        if not result.deleted:
            raise ResourceNotFoundException("campus", campus_id)
        return result
