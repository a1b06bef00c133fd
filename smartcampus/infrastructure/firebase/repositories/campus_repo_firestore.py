"""Firestore-backed campus repository (implements ICampusRepository)."""

from __future__ import annotations

from smartcampus.application.dtos.campus import CampusResult
from smartcampus.domain.enums import EntityStatus
from smartcampus.infrastructure.firebase._rest_client import (
    DocumentSnapshot,
    FirestoreRESTClient,
)
from smartcampus.infrastructure.firebase._rest_encoding import ArrayRemove
from smartcampus.infrastructure.firebase.collections import COLLECTION_CAMPUSES


def _to_result(snapshot: DocumentSnapshot) -> CampusResult:
    d = snapshot.to_dict()
    raw_status = d.get("status")
    admin_ids = d.get("adminId") or []
    return CampusResult(
        id=snapshot.id,
        name=d.get("name") or "",
        status=EntityStatus.parse(raw_status),
        raw_status=raw_status if isinstance(raw_status, str) else "",
        admin_ids=tuple(str(a) for a in admin_ids if a),
        storage_folder=d.get("storageFolder") or None,
        city=d.get("city") or "",
        country=d.get("country") or "",
    )


class FirestoreCampusRepository:
    """Campus documents in the Campuses collection."""

    def __init__(self, client: FirestoreRESTClient, batch_size: int = 50) -> None:
        self._client = client
        self._coll = client.collection(COLLECTION_CAMPUSES)
        self._batch_size = batch_size

    async def get_by_id(self, campus_id: str) -> CampusResult | None:
        doc = await self._coll.document(campus_id).get()
        return _to_result(doc) if doc else None

    async def find_by_name(self, name: str) -> CampusResult | None:
        """Exact-match lookup (server-side where query, at most one doc)."""
        async for snapshot in self._coll.where("name", "==", name).limit(1).stream():
            return _to_result(snapshot)
        return None

    async def list_names(self) -> list[str]:
        return [
            snapshot.to_dict().get("name") or ""
            async for snapshot in self._coll.stream()
        ]

    async def list_blob_roots(self) -> list[str]:
        return [_to_result(snapshot).blob_root() async for snapshot in self._coll.stream()]

    async def list_by_status(self, status: EntityStatus) -> list[CampusResult]:
        return [
            _to_result(snapshot)
            async for snapshot in self._coll.where("status", "==", status.value).stream()
        ]

    async def update_status(self, campus_id: str, status: EntityStatus) -> bool:
        return await self._coll.document(campus_id).update({"status": status.value})

    async def remove_admin(self, campus_id: str, admin_id: str) -> list[str] | None:
        """Atomic array-remove, then re-read the list that remains."""
        ref = self._coll.document(campus_id)
        if not await ref.update({"adminId": ArrayRemove([admin_id])}):
            return None
        doc = await ref.get()
        if doc is None:
            return None
        return list(_to_result(doc).admin_ids)

    async def delete_recursive(self, campus_id: str) -> int:
        return await self._client.recursive_delete(
            self._coll.document(campus_id), batch_size=self._batch_size
        )
