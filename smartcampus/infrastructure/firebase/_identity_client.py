"""Thin Identity Toolkit REST client (Firebase Auth admin operations, no firebase-admin).

Same token handling as the Firestore client. Identity Toolkit reports
errors as HTTP 400 with a code in error.message (EMAIL_EXISTS, USER_NOT_FOUND).
"""

from __future__ import annotations

import asyncio
import json
from typing import Any

import httpx

from smartcampus.infrastructure.exceptions import FirebaseAPIError
from smartcampus.infrastructure.firebase._rest_client import (
    _get_access_token,
    _request_async,
)

_BASE = "https://identitytoolkit.googleapis.com/v1"

USER_NOT_FOUND = "USER_NOT_FOUND"
EMAIL_EXISTS = "EMAIL_EXISTS"


class IdentityToolkitClient:
    """Account lookup, creation, deletion and update for one Firebase project."""

    def __init__(
        self,
        project_id: str,
        credentials,
        *,
        http_client: httpx.AsyncClient,
    ) -> None:
        self._project_id = project_id
        self._credentials = credentials
        self._prefix = f"{_BASE}/projects/{project_id}"
        self._http = http_client

    async def get_token(self) -> str:
        return await asyncio.to_thread(_get_access_token, self._credentials)

    async def _post(self, action: str, body: dict[str, Any]) -> dict:
        out = await _request_async(
            self._http,
            f"{self._prefix}/{action}",
            method="POST",
            body=body,
            access_token=await self.get_token(),
            service="identity",
        )
        if out is None:
            raise FirebaseAPIError("identity", 404, "NOT_FOUND")
        return out

    async def lookup_by_email(self, email: str) -> dict | None:
        """Return the account record for email, or None when there is none."""
        out = await self._post("accounts:lookup", {"email": [email]})
        users = out.get("users") or []
        return users[0] if users else None

    async def create_account(self, email: str, password: str) -> str:
        """Create an email/password account; return its localId (uid)."""
        out = await self._post("accounts", {"email": email, "password": password})
        return out["localId"]

    async def delete_account(self, uid: str) -> bool:
        """Delete the account; return False when it does not exist."""
        try:
            await self._post("accounts:delete", {"localId": uid})
        except FirebaseAPIError as e:
            if e.reason == USER_NOT_FOUND:
                return False
            raise
        return True

    async def set_custom_attributes(self, uid: str, claims: dict[str, Any] | None) -> None:
        """Replace custom claims; None or {} clears them."""
        await self._post(
            "accounts:update",
            {"localId": uid, "customAttributes": json.dumps(claims or {})},
        )

    async def update_password(self, uid: str, password: str) -> None:
        await self._post("accounts:update", {"localId": uid, "password": password})
