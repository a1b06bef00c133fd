"""Status transitions for Campus and Admin, with claim sync and campus-to-admin cascade."""

from __future__ import annotations

import logging

from smartcampus.application.dtos.caller import CallerContext
from smartcampus.application.dtos.lifecycle import StatusChangeResult, StepResult
from smartcampus.application.interfaces.repositories import (
    IAdminRepository,
    ICampusRepository,
)
from smartcampus.application.interfaces.services import IIdentityGateway
from smartcampus.application.services.authorization_service import AuthorizationService
from smartcampus.domain.entities.admin import ADMIN_CLAIM_ROLE, admin_claims
from smartcampus.domain.enums import EntityStatus, StepOutcome, TransitionKind
from smartcampus.domain.exceptions import (
    FailedPreconditionException,
    InvalidArgumentException,
    ResourceNotFoundException,
    SmartCampusException,
)
from smartcampus.domain.transitions import ensure_transition_allowed
from smartcampus.shared.telemetry.tracing import traced

logger = logging.getLogger(__name__)


def parse_requested_status(value: object) -> EntityStatus:
    """Parse a requested status (case-insensitive) or raise InvalidArgumentException."""
    status = EntityStatus.parse(value)
    if status is None:
        raise InvalidArgumentException(
            f"newStatus must be one of: {', '.join(EntityStatus.values())}",
            field="newStatus",
        )
    return status


class StatusTransitionService:
    """Applies status changes and keeps identity claims in line with admin status.

    An admin holds {role, campusId} claims exactly while active.
    """

    def __init__(
        self,
        campus_repo: ICampusRepository,
        admin_repo: IAdminRepository,
        identity: IIdentityGateway,
        authz: AuthorizationService,
        admin_claim_role: str = ADMIN_CLAIM_ROLE,
    ) -> None:
        self.campus_repo = campus_repo
        self.admin_repo = admin_repo
        self.identity = identity
        self.authz = authz
        self.admin_claim_role = admin_claim_role

    async def _sync_claims(
        self, email: str, campus_id: str, status: EntityStatus
    ) -> StepResult:
        """Set claims when active, clear them otherwise. Provider failures propagate."""
        if not email:
            return StepResult("claims", StepOutcome.SKIPPED_NOT_FOUND, "no email")
        uid = await self.identity.get_uid_by_email(email)
        if uid is None:
            logger.warning("No identity account for %s; claims not updated", email)
            return StepResult("claims", StepOutcome.SKIPPED_NOT_FOUND, email)
        if status is EntityStatus.ACTIVE:
            await self.identity.set_custom_claims(
                uid, admin_claims(campus_id, self.admin_claim_role)
            )
            return StepResult("claims", StepOutcome.APPLIED, f"set for {email}")
        await self.identity.set_custom_claims(uid, None)
        return StepResult("claims", StepOutcome.APPLIED, f"cleared for {email}")

    @traced("status.set_admin_status")
    async def set_admin_status(
        self,
        admin_id: str,
        new_status: object,
        caller: CallerContext | None,
    ) -> StatusChangeResult:
        """Change one admin's status and sync its claims.

        The status write is not rolled back when the claims update fails.
        """
        self.authz.require_sysadmin(caller)
        if not admin_id:
            raise InvalidArgumentException("adminId is required.", field="adminId")
        requested = parse_requested_status(new_status)

        admin = await self.admin_repo.get_by_id(admin_id)
        if admin is None:
            raise ResourceNotFoundException("admin", admin_id)
        if not admin.email or not admin.campus_id:
            raise FailedPreconditionException(
                "Admin document is missing required fields.", admin_id=admin_id
            )
        kind = ensure_transition_allowed(
            "admin", admin_id, admin.status, requested, admin.raw_status
        )

        if not await self.admin_repo.update_status(admin_id, requested):
            raise ResourceNotFoundException("admin", admin_id)
        step = await self._sync_claims(admin.email, admin.campus_id, requested)
        logger.info(
            "Admin %s status %s -> %s (%s)",
            admin_id,
            admin.raw_status,
            requested.value,
            step.outcome.value,
        )
        return StatusChangeResult(
            entity_id=admin_id,
            previous=admin.raw_status,
            new_status=requested,
            kind=kind,
            message=(
                f"Admin {admin.email} status updated to {requested.value.upper()} "
                "and custom claims handled."
            ),
            admins_updated=1,
            steps=(step,),
        )

    @traced("status.set_campus_status")
    async def set_campus_status(
        self,
        campus_id: str,
        new_status: object,
        caller: CallerContext | None,
    ) -> StatusChangeResult:
        """Change a campus status and cascade to its admins.

        activate: only the primary admin (adminId[0]) becomes active and gets claims.
        reject: every admin becomes reject and loses claims.
        demote: every admin becomes pending; claims are left alone.
        A per-admin identity failure is recorded and the loop continues.
        """
        self.authz.require_sysadmin(caller)
        if not campus_id:
            raise InvalidArgumentException("campusId is required.", field="campusId")
        requested = parse_requested_status(new_status)

        campus = await self.campus_repo.get_by_id(campus_id)
        if campus is None:
            raise ResourceNotFoundException("campus", campus_id)
        kind = ensure_transition_allowed(
            "campus", campus_id, campus.status, requested, campus.raw_status
        )

        if not await self.campus_repo.update_status(campus_id, requested):
            raise ResourceNotFoundException("campus", campus_id)

        if kind is TransitionKind.ACTIVATE:
            targets = list(campus.admin_ids[:1])
        else:
            targets = list(campus.admin_ids)

        steps: list[StepResult] = []
        updated = 0
        for admin_id in targets:
            admin = await self.admin_repo.get_by_id(admin_id)
            if admin is None:
                steps.append(
                    StepResult(f"admin:{admin_id}", StepOutcome.SKIPPED_NOT_FOUND)
                )
                continue
            if not await self.admin_repo.update_status(admin_id, requested):
                steps.append(
                    StepResult(f"admin:{admin_id}", StepOutcome.SKIPPED_NOT_FOUND)
                )
                continue
            updated += 1
            if kind is TransitionKind.DEMOTE:
                continue
            try:
                step = await self._sync_claims(admin.email, campus_id, requested)
            except SmartCampusException as e:
                logger.warning(
                    "Claims update failed for admin %s of campus %s: %s",
                    admin_id,
                    campus_id,
                    e.message,
                )
                step = StepResult("claims", StepOutcome.FAILED, e.message)
            steps.append(
                StepResult(f"claims:{admin_id}", step.outcome, step.detail)
            )

        logger.info(
            "Campus %s status %s -> %s; %d admin(s) updated",
            campus_id,
            campus.raw_status,
            requested.value,
            updated,
        )
        return StatusChangeResult(
            entity_id=campus_id,
            previous=campus.raw_status,
            new_status=requested,
            kind=kind,
            message=(
                f"Campus status updated to '{requested.value}' "
                f"(from '{campus.raw_status}'), {updated} admin(s) updated."
            ),
            admins_updated=updated,
            steps=tuple(steps),
        )
