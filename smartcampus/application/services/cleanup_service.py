"""Sweep that physically deletes every admin and campus marked reject."""

from __future__ import annotations

import logging

from smartcampus.application.dtos.lifecycle import CleanupResult
from smartcampus.application.interfaces.repositories import (
    IAdminRepository,
    ICampusRepository,
)
from smartcampus.application.services.cascading_deletion_service import (
    CascadingDeletionService,
)
from smartcampus.domain.enums import EntityStatus
from smartcampus.shared.telemetry.tracing import add_span_attributes, traced

logger = logging.getLogger(__name__)


class CleanupService:
    """Runs one cleanup sweep. Safe to re-run: a second sweep finds nothing to delete."""

    def __init__(
        self,
        campus_repo: ICampusRepository,
        admin_repo: IAdminRepository,
        deletion: CascadingDeletionService,
    ) -> None:
        self.campus_repo = campus_repo
        self.admin_repo = admin_repo
        self.deletion = deletion

    @traced("cleanup.cleanup_rejected")
    async def cleanup_rejected(self) -> CleanupResult:
        """Delete rejected admins, then rejected campuses.

        A rejected campus whose id was the campusId of a rejected admin is
        skipped in the second phase; it was handled (or cascaded) by the first.
        """
        deleted_admins = 0
        deleted_campuses = 0
        cascaded_campuses = 0
        processed_campuses: set[str] = set()

        for admin in await self.admin_repo.list_by_status(EntityStatus.REJECT):
            result = await self.deletion.delete_admin(admin.id)
            if result.deleted:
                deleted_admins += 1
            if result.campus_deleted:
                cascaded_campuses += 1
            if admin.campus_id:
                processed_campuses.add(admin.campus_id)

        for campus in await self.campus_repo.list_by_status(EntityStatus.REJECT):
            if campus.id in processed_campuses:
                continue
            result = await self.deletion.delete_campus(campus.id)
            if result.deleted:
                deleted_campuses += 1

        add_span_attributes(
            deleted_admins=deleted_admins,
            deleted_campuses=deleted_campuses,
            cascaded_campuses=cascaded_campuses,
        )
        logger.info(
            "Cleanup deleted %d rejected admin(s) and %d rejected campus(es); %d campus(es) cascaded",
            deleted_admins,
            deleted_campuses,
            cascaded_campuses,
        )
        return CleanupResult(
            deleted_admins=deleted_admins,
            deleted_campuses=deleted_campuses,
            cascaded_campuses=cascaded_campuses,
        )
