"""DTOs for campus reads (no dependency on Firestore)."""

from dataclasses import dataclass, field

from smartcampus.domain.enums import EntityStatus


@dataclass(frozen=True)
class CampusResult:
    """Campus read-model.

    status is None when the stored value is not a known status; raw_status
    keeps the value as stored.
    """

    id: str
    name: str
    status: EntityStatus | None
    raw_status: str = ""
    admin_ids: tuple[str, ...] = field(default_factory=tuple)
    storage_folder: str | None = None
    city: str = ""
    country: str = ""

    def blob_root(self) -> str:
        """Blob folder of the campus; legacy documents without storageFolder use the id."""
        return self.storage_folder or self.id
