"""DTOs for admin reads (no dependency on Firestore)."""

from dataclasses import dataclass

from smartcampus.domain.enums import EntityStatus


@dataclass(frozen=True)
class AdminResult:
    """Admin read-model. id is the identity uid; email and campus_id may be empty on malformed docs."""

    id: str
    email: str
    campus_id: str
    status: EntityStatus | None
    raw_status: str = ""
    admin_name: str = ""
    role: str = ""
