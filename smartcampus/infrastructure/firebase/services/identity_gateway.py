"""Identity gateway over Identity Toolkit (implements IIdentityGateway)."""

from __future__ import annotations

import logging
from typing import Any

from smartcampus.domain.exceptions import AlreadyExistsException
from smartcampus.infrastructure.exceptions import FirebaseAPIError
from smartcampus.infrastructure.firebase._identity_client import (
    EMAIL_EXISTS,
    IdentityToolkitClient,
)

logger = logging.getLogger(__name__)


class FirebaseIdentityGateway:
    def __init__(self, client: IdentityToolkitClient) -> None:
        self._client = client

    async def get_uid_by_email(self, email: str) -> str | None:
        record = await self._client.lookup_by_email(email)
        return record.get("localId") if record else None

    async def create_user(self, email: str, password: str) -> str:
        try:
            uid = await self._client.create_account(email, password)
        except FirebaseAPIError as e:
            if e.reason == EMAIL_EXISTS:
                raise AlreadyExistsException("account", email) from None
            raise
        logger.info("Created identity account %s for %s", uid, email)
        return uid

    async def delete_user(self, uid: str) -> bool:
        return await self._client.delete_account(uid)

    async def set_custom_claims(self, uid: str, claims: dict[str, Any] | None) -> None:
        await self._client.set_custom_attributes(uid, claims)

    async def update_password(self, uid: str, password: str) -> None:
        await self._client.update_password(uid, password)
