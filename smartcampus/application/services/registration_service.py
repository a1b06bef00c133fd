"""Registration workflows: register a new campus, or request to manage an existing one.

Both create the identity account first and then commit every document in a
single atomic write. When the write fails the account is deleted again.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable

from smartcampus.application.dtos.registration import (
    CampusRegistration,
    ManageRequest,
    RegistrationResult,
)
from smartcampus.application.interfaces.repositories import (
    ICampusRepository,
    IRegistrationStore,
)
from smartcampus.application.interfaces.services import (
    IIdentityGateway,
    INotificationService,
)
from smartcampus.domain.entities.admin import AdminEntity
from smartcampus.domain.entities.campus import CampusEntity, derive_storage_folder
from smartcampus.domain.exceptions import (
    AlreadyExistsException,
    InvalidArgumentException,
    ResourceNotFoundException,
    SmartCampusException,
)
from smartcampus.shared.telemetry.tracing import traced

logger = logging.getLogger(__name__)

_NEW_CAMPUS_SUBJECT = "New Campus Management Request"
_MANAGE_SUBJECT = "New Request to Manage Existing Campus"


def _require_fields(values: dict[str, str], message: str) -> None:
    """Raise InvalidArgumentException naming the first blank field."""
    for name, value in values.items():
        if not value or not str(value).strip():
            raise InvalidArgumentException(message, field=name)


def _request_body(intro: str, admin_name: str, email: str, campus_name: str) -> str:
    return (
        f"{intro}\n\n"
        f"Admin Name: {admin_name}\n"
        f"Email: {email}\n"
        f"Campus: {campus_name}\n\n"
        "Please review this request in the system."
    )


class RegistrationService:
    """Creates pending campuses and pending admins for sysadmin review."""

    def __init__(
        self,
        campus_repo: ICampusRepository,
        identity: IIdentityGateway,
        store: IRegistrationStore,
        notifier: INotificationService,
        notify_recipients: list[str] | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self.campus_repo = campus_repo
        self.identity = identity
        self.store = store
        self.notifier = notifier
        self.notify_recipients = list(notify_recipients or [])
        self._new_id = id_factory or (lambda: str(uuid.uuid4()))

    async def _rollback_account(self, uid: str, email: str) -> None:
        """Delete the account created for a registration whose documents failed to commit."""
        try:
            await self.identity.delete_user(uid)
            logger.warning("Rolled back identity account %s (%s)", uid, email)
        except SmartCampusException as e:
            logger.error(
                "Rollback of identity account %s (%s) failed; account is orphaned: %s",
                uid,
                email,
                e.message,
            )

    @traced("registration.register_campus")
    async def register_campus(self, data: CampusRegistration) -> RegistrationResult:
        """Register a new pending campus with its pending primary admin.

        Raises:
            InvalidArgumentException: a required field is blank.
            AlreadyExistsException: campus name (case-insensitive), its storage
                folder, or email taken.
        """
        _require_fields(
            {
                "email": data.email,
                "password": data.password,
                "adminName": data.admin_name,
                "role": data.role,
                "campusName": data.campus_name,
                "city": data.city,
                "country": data.country,
            },
            "Missing required form fields.",
        )
        wanted = data.campus_name.strip().lower()
        for existing in await self.campus_repo.list_names():
            if existing.strip().lower() == wanted:
                raise AlreadyExistsException("campus", data.campus_name)
        # Distinct names can map to the same blob folder ("Tel.Aviv", "Tel_Aviv").
        folder = derive_storage_folder(data.campus_name)
        if folder in await self.campus_repo.list_blob_roots():
            raise AlreadyExistsException("campus storage folder", folder)
        if await self.identity.get_uid_by_email(data.email) is not None:
            raise AlreadyExistsException("account", data.email)

        uid = await self.identity.create_user(data.email, data.password)
        try:
            campus = CampusEntity(
                id=self._new_id(),
                name=data.campus_name,
                city=data.city,
                country=data.country,
                primary_admin_id=uid,
                description=data.description or "",
                logo_url=data.logo_url,
                map_image_url=data.map_image_url,
            )
            admin = AdminEntity(
                id=uid,
                admin_name=data.admin_name,
                email=data.email,
                role=data.role,
                campus_id=campus.id,
                employee_approval_file_url=data.employee_approval_file_url,
                admin_photo_url=data.admin_photo_url,
            )
            await self.store.create_campus_with_admin(campus, admin)
        except Exception:
            logger.exception("Campus registration failed for %s; rolling back", data.email)
            await self._rollback_account(uid, data.email)
            raise

        logger.info("Registered campus %s (%s) with admin %s", campus.id, campus.name, uid)
        await self.notifier.send(
            self.notify_recipients,
            _NEW_CAMPUS_SUBJECT,
            _request_body(
                "A new campus management request has been submitted.",
                data.admin_name,
                data.email,
                data.campus_name,
            ),
        )
        return RegistrationResult(
            admin_id=uid, campus_id=campus.id, storage_folder=campus.storage_folder
        )

    @traced("registration.request_manage")
    async def request_manage(self, data: ManageRequest) -> RegistrationResult:
        """Enroll a new pending admin into an existing campus (exact name match).

        The campus is resolved before the account is created, so an unknown
        campus leaves nothing behind.
        """
        _require_fields(
            {
                "email": data.email,
                "password": data.password,
                "adminName": data.admin_name,
                "role": data.role,
                "campusName": data.campus_name,
            },
            "Missing required fields.",
        )
        campus = await self.campus_repo.find_by_name(data.campus_name)
        if campus is None:
            raise ResourceNotFoundException("campus", data.campus_name)

        uid = await self.identity.create_user(data.email, data.password)
        try:
            admin = AdminEntity(
                id=uid,
                admin_name=data.admin_name,
                email=data.email,
                role=data.role,
                campus_id=campus.id,
                employee_approval_file_url=data.employee_approval_file_url,
                admin_photo_url=data.admin_photo_url,
            )
            await self.store.enroll_admin(campus.id, admin)
        except Exception:
            logger.exception("Manage request failed for %s; rolling back", data.email)
            await self._rollback_account(uid, data.email)
            raise

        logger.info("Admin %s requested to manage campus %s", uid, campus.id)
        await self.notifier.send(
            self.notify_recipients,
            _MANAGE_SUBJECT,
            _request_body(
                "A new request has been submitted to manage an existing campus.",
                data.admin_name,
                data.email,
                data.campus_name,
            ),
        )
        return RegistrationResult(
            admin_id=uid, campus_id=campus.id, storage_folder=campus.blob_root()
        )
