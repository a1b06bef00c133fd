"""Firebase-backed service adapters (identity, blob storage)."""

from smartcampus.infrastructure.firebase.services.blob_store import FirebaseBlobStore
from smartcampus.infrastructure.firebase.services.identity_gateway import (
    FirebaseIdentityGateway,
)

__all__ = [
    "FirebaseBlobStore",
    "FirebaseIdentityGateway",
]
