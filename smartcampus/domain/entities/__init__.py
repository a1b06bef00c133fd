"""Domain entities.

Pure domain models; no Firestore or HTTP concerns.
"""

from smartcampus.domain.entities.admin import AdminEntity, admin_claims
from smartcampus.domain.entities.campus import (
    CampusEntity,
    admin_blob_prefix,
    campus_blob_prefix,
    derive_storage_folder,
)

__all__ = [
    "AdminEntity",
    "CampusEntity",
    "admin_blob_prefix",
    "admin_claims",
    "campus_blob_prefix",
    "derive_storage_folder",
]
