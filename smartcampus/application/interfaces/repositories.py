"""Repository interfaces (ports) for the application layer.

Protocols define contracts for document-store access (DIP). Implementations
live in infrastructure (Firestore REST).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from smartcampus.domain.enums import EntityStatus

if TYPE_CHECKING:
    from smartcampus.application.dtos.admin import AdminResult
    from smartcampus.application.dtos.campus import CampusResult
    from smartcampus.domain.entities.admin import AdminEntity
    from smartcampus.domain.entities.campus import CampusEntity


class ICampusRepository(Protocol):
    """Protocol for Campus documents."""

    async def get_by_id(self, campus_id: str) -> CampusResult | None:
        """Return campus by id, or None when absent."""
        ...

    async def find_by_name(self, name: str) -> CampusResult | None:
        """Return the first campus whose name equals name exactly."""
        ...

    async def list_names(self) -> list[str]:
        """Return the stored name of every campus (full scan)."""
        ...

    async def list_blob_roots(self) -> list[str]:
        """Return the blob folder of every campus (full scan)."""
        ...

    async def list_by_status(self, status: EntityStatus) -> list[CampusResult]:
        """Return campuses whose stored status equals status."""
        ...

    async def update_status(self, campus_id: str, status: EntityStatus) -> bool:
        """Overwrite the status field only; return False when the document is absent."""
        ...

    async def remove_admin(self, campus_id: str, admin_id: str) -> list[str] | None:
        """Atomically remove admin_id from adminId; return the list afterwards.

        Returns None when the campus document does not exist.
        """
        ...

    async def delete_recursive(self, campus_id: str) -> int:
        """Delete the campus document and its subcollections; return documents deleted."""
        ...


class IAdminRepository(Protocol):
    """Protocol for Admin documents (document id = identity uid)."""

    async def get_by_id(self, admin_id: str) -> AdminResult | None:
        """Return admin by id, or None when absent."""
        ...

    async def list_by_status(self, status: EntityStatus) -> list[AdminResult]:
        """Return admins whose stored status equals status."""
        ...

    async def update_status(self, admin_id: str, status: EntityStatus) -> bool:
        """Overwrite the status field; return False when the document is absent."""
        ...

    async def delete(self, admin_id: str) -> None:
        """Delete the admin document (no-op when absent)."""
        ...


class IRegistrationStore(Protocol):
    """Protocol for the multi-document writes of the registration workflows.

    Each method is a single atomic commit: all documents are written or none.
    """

    async def create_campus_with_admin(
        self, campus: CampusEntity, admin: AdminEntity
    ) -> None:
        """Write the campus, its Buildings placeholder, and its primary admin."""
        ...

    async def enroll_admin(self, campus_id: str, admin: AdminEntity) -> None:
        """Array-union the admin into the campus adminId and create the admin document.

        Fails when the campus no longer exists.
        """
        ...
