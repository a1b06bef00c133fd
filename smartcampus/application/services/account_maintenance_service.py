"""Existence checks and sysadmin account maintenance (password reset, manual claims)."""

from __future__ import annotations

import logging

from smartcampus.application.dtos.caller import CallerContext
from smartcampus.application.interfaces.repositories import ICampusRepository
from smartcampus.application.interfaces.services import IIdentityGateway
from smartcampus.application.services.authorization_service import AuthorizationService
from smartcampus.domain.entities.admin import ADMIN_CLAIM_ROLE, admin_claims
from smartcampus.domain.exceptions import (
    InvalidArgumentException,
    ResourceNotFoundException,
)

logger = logging.getLogger(__name__)


class AccountMaintenanceService:
    def __init__(
        self,
        campus_repo: ICampusRepository,
        identity: IIdentityGateway,
        authz: AuthorizationService,
    ) -> None:
        self.campus_repo = campus_repo
        self.identity = identity
        self.authz = authz

    async def check_campus_exists(self, name: str | None) -> bool:
        """Return True when a campus name matches after trimming and lowercasing both sides."""
        wanted = (name or "").strip().lower()
        if not wanted:
            raise InvalidArgumentException("Missing campus name", field="name")
        return any(
            existing.strip().lower() == wanted
            for existing in await self.campus_repo.list_names()
        )

    async def check_email_exists(self, email: str | None) -> bool:
        """Return True when an identity account exists for email. Provider errors propagate."""
        if not email:
            raise InvalidArgumentException("Missing email.", field="email")
        return await self.identity.get_uid_by_email(email) is not None

    async def _require_uid(self, email: str) -> str:
        uid = await self.identity.get_uid_by_email(email)
        if uid is None:
            raise ResourceNotFoundException("account", email)
        return uid

    async def reset_user_password(
        self, email: str | None, new_password: str | None, caller: CallerContext | None
    ) -> str:
        """Set a new password for the account of email; return a confirmation message."""
        self.authz.require_sysadmin(caller)
        if not email or not new_password:
            raise InvalidArgumentException("Missing email or newPassword")
        uid = await self._require_uid(email)
        await self.identity.update_password(uid, new_password)
        logger.info("Password reset for %s by %s", email, caller.uid if caller else "-")
        return f"Password updated successfully for {email}"

    async def set_manual_claims(
        self,
        email: str | None,
        campus_id: str | None,
        caller: CallerContext | None,
        role: str | None = None,
    ) -> dict[str, str]:
        """Set {role, campusId} claims on the account of email; return the claims set."""
        self.authz.require_sysadmin(caller)
        if not email or not campus_id:
            raise InvalidArgumentException("Missing email or campusId")
        uid = await self._require_uid(email)
        claims = admin_claims(campus_id, role or ADMIN_CLAIM_ROLE)
        await self.identity.set_custom_claims(uid, claims)
        logger.info("Manual claims %s set for %s", claims, email)
        return claims
