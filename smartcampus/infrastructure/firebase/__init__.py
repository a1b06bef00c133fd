"""Firebase integration over the Google REST APIs (Firestore, Identity Toolkit, Cloud Storage)."""

from smartcampus.infrastructure.firebase.client import (
    close_firebase,
    get_firestore_client,
    get_identity_client,
    get_project_id,
    get_storage_client,
    init_firebase,
)

__all__ = [
    "close_firebase",
    "get_firestore_client",
    "get_identity_client",
    "get_project_id",
    "get_storage_client",
    "init_firebase",
]
