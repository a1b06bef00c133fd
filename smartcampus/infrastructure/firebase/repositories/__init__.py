"""Firestore-backed repositories (implement the application repository ports)."""

from smartcampus.infrastructure.firebase.repositories.admin_repo_firestore import (
    FirestoreAdminRepository,
)
from smartcampus.infrastructure.firebase.repositories.campus_repo_firestore import (
    FirestoreCampusRepository,
)
from smartcampus.infrastructure.firebase.repositories.registration_store_firestore import (
    FirestoreRegistrationStore,
)

__all__ = [
    "FirestoreAdminRepository",
    "FirestoreCampusRepository",
    "FirestoreRegistrationStore",
]
