"""Firestore-backed admin repository (implements IAdminRepository)."""

from __future__ import annotations

from smartcampus.application.dtos.admin import AdminResult
from smartcampus.domain.enums import EntityStatus
from smartcampus.infrastructure.firebase._rest_client import (
    DocumentSnapshot,
    FirestoreRESTClient,
)
from smartcampus.infrastructure.firebase.collections import COLLECTION_ADMIN_PROFILES


def _to_result(snapshot: DocumentSnapshot) -> AdminResult:
    d = snapshot.to_dict()
    raw_status = d.get("status")
    return AdminResult(
        id=snapshot.id,
        email=d.get("email") or "",
        campus_id=d.get("campusId") or "",
        status=EntityStatus.parse(raw_status),
        raw_status=raw_status if isinstance(raw_status, str) else "",
        admin_name=d.get("adminName") or "",
        role=d.get("role") or "",
    )


class FirestoreAdminRepository:
    """Admin documents in the Admin_Profiles collection (document id = identity uid)."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._coll = client.collection(COLLECTION_ADMIN_PROFILES)

    async def get_by_id(self, admin_id: str) -> AdminResult | None:
        doc = await self._coll.document(admin_id).get()
        return _to_result(doc) if doc else None

    async def list_by_status(self, status: EntityStatus) -> list[AdminResult]:
        return [
            _to_result(snapshot)
            async for snapshot in self._coll.where("status", "==", status.value).stream()
        ]

    async def update_status(self, admin_id: str, status: EntityStatus) -> bool:
        return await self._coll.document(admin_id).update({"status": status.value})

    async def delete(self, admin_id: str) -> None:
        await self._coll.document(admin_id).delete()
