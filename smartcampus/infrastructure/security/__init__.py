"""Caller authentication (Firebase ID tokens)."""

from smartcampus.infrastructure.security.firebase_token import (
    FirebaseTokenVerifier,
    caller_from_claims,
)

__all__ = ["FirebaseTokenVerifier", "caller_from_claims"]
