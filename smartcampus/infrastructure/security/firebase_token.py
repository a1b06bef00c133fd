"""Firebase ID token verification (implements ITokenVerifier).

google-auth verifies signature, audience and expiry against Google's
public certificates; the blocking fetch runs in a worker thread.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from google.auth import exceptions as google_auth_exceptions
from google.auth.transport.requests import Request
from google.oauth2 import id_token

from smartcampus.application.dtos.caller import CallerContext
from smartcampus.domain.exceptions import UnauthenticatedException

logger = logging.getLogger(__name__)


def caller_from_claims(claims: dict[str, Any]) -> CallerContext:
    """Build the caller context from verified ID token claims."""
    uid = claims.get("user_id") or claims.get("sub") or claims.get("uid")
    if not uid:
        raise UnauthenticatedException("Token has no subject.")
    return CallerContext(
        uid=str(uid),
        email=claims.get("email"),
        role=claims.get("role"),
        campus_id=claims.get("campusId"),
    )


class FirebaseTokenVerifier:
    def __init__(self, project_id: str) -> None:
        self._project_id = project_id

    async def verify(self, token: str) -> dict[str, Any]:
        try:
            return await asyncio.to_thread(
                id_token.verify_firebase_token,
                token,
                Request(),
                audience=self._project_id,
            )
        except (ValueError, google_auth_exceptions.GoogleAuthError) as e:
            logger.info("Rejected ID token: %s", e)
            raise UnauthenticatedException("Invalid or expired ID token.") from None
