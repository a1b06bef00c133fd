"""Firestore-backed registration writes (implements IRegistrationStore).

Every method builds one WriteBatch and commits it, so either all documents
are written or none are.
"""

from __future__ import annotations

import logging
from typing import Any

from smartcampus.domain.entities.admin import AdminEntity
from smartcampus.domain.entities.campus import CampusEntity
from smartcampus.infrastructure.firebase._rest_client import FirestoreRESTClient
from smartcampus.infrastructure.firebase._rest_encoding import (
    SERVER_TIMESTAMP,
    ArrayUnion,
)
from smartcampus.infrastructure.firebase.collections import (
    COLLECTION_ADMIN_PROFILES,
    COLLECTION_CAMPUSES,
    PLACEHOLDER_DOC_ID,
    SUBCOLLECTION_BUILDINGS,
)

logger = logging.getLogger(__name__)


def _admin_document(admin: AdminEntity) -> dict[str, Any]:
    doc: dict[str, Any] = {
        "adminName": admin.admin_name,
        "email": admin.email,
        "role": admin.role,
        "campusId": admin.campus_id,
        "status": admin.status.value,
        "createdAt": SERVER_TIMESTAMP,
    }
    if admin.employee_approval_file_url is not None:
        doc["employeeApprovalFileURL"] = admin.employee_approval_file_url
    if admin.admin_photo_url is not None:
        doc["adminPhotoURL"] = admin.admin_photo_url
    return doc


def _campus_document(campus: CampusEntity) -> dict[str, Any]:
    return {
        "name": campus.name,
        "city": campus.city,
        "country": campus.country,
        "description": campus.description,
        "logoURL": campus.logo_url,
        "mapImageURL": campus.map_image_url,
        "storageFolder": campus.storage_folder,
        "status": campus.status.value,
        "createdAt": SERVER_TIMESTAMP,
        "adminId": campus.admin_ids,
    }


class FirestoreRegistrationStore:
    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._campuses = client.collection(COLLECTION_CAMPUSES)
        self._admins = client.collection(COLLECTION_ADMIN_PROFILES)

    async def create_campus_with_admin(
        self, campus: CampusEntity, admin: AdminEntity
    ) -> None:
        """Campus + Buildings placeholder + primary admin in one commit."""
        campus_ref = self._campuses.document(campus.id)
        batch = self._client.batch()
        batch.create(campus_ref, _campus_document(campus))
        batch.set(
            campus_ref.collection(SUBCOLLECTION_BUILDINGS).document(PLACEHOLDER_DOC_ID),
            {"createdAt": SERVER_TIMESTAMP},
        )
        batch.create(self._admins.document(admin.id), _admin_document(admin))
        await batch.commit()
        logger.debug("Committed campus %s with admin %s", campus.id, admin.id)

    async def enroll_admin(self, campus_id: str, admin: AdminEntity) -> None:
        """Array-union into adminId plus the admin document, in one commit.

        Raises DocumentNotFoundError when the campus was deleted meanwhile.
        """
        batch = self._client.batch()
        batch.update(
            self._campuses.document(campus_id),
            {"adminId": ArrayUnion([admin.id]), "updatedAt": SERVER_TIMESTAMP},
        )
        batch.set(self._admins.document(admin.id), _admin_document(admin))
        await batch.commit()
        logger.debug("Enrolled admin %s into campus %s", admin.id, campus_id)
