"""Campus domain entity.

Represents a new campus registration, independent of persistence.
"""

import re
from dataclasses import dataclass, field

from smartcampus.domain.enums import EntityStatus
from smartcampus.domain.exceptions import InvalidArgumentException

_STORAGE_FOLDER_UNSAFE = re.compile(r"[/\\?%*:|\"<>.]")


def derive_storage_folder(name: str) -> str:
    """Return the blob-path root for a campus name.

    Trims the name and replaces every path-unsafe character with '_'.
    Computed once at creation; the stored value is never recomputed.
    """
    return _STORAGE_FOLDER_UNSAFE.sub("_", name.strip())


def campus_blob_prefix(root_prefix: str, storage_folder: str) -> str:
    """Return the prefix holding every object of a campus (trailing slash included)."""
    return f"{root_prefix}/{storage_folder}/"


def admin_blob_prefix(root_prefix: str, storage_folder: str, admin_id: str) -> str:
    """Return the prefix holding the per-admin uploads of a campus."""
    return f"{root_prefix}/{storage_folder}/Meta/{admin_id}/"


@dataclass
class CampusEntity:
    """A campus about to be created by the registration workflow.

    Starts pending with a single (primary) admin. Validation runs on construction.
    """

    id: str
    name: str
    city: str
    country: str
    primary_admin_id: str
    description: str = ""
    logo_url: str = ""
    map_image_url: str = ""
    status: EntityStatus = EntityStatus.PENDING
    storage_folder: str = field(default="")

    def __post_init__(self) -> None:
        self.validate()
        if not self.storage_folder:
            self.storage_folder = derive_storage_folder(self.name)

    def validate(self) -> None:
        """Validate campus business rules. Raises InvalidArgumentException if invalid."""
        if not self.id:
            raise InvalidArgumentException("Campus ID is required", field="id")
        if not self.name or not self.name.strip():
            raise InvalidArgumentException("Campus name is required", field="campusName")
        if not derive_storage_folder(self.name).strip("_"):
            raise InvalidArgumentException(
                "Campus name must contain at least one path-safe character",
                field="campusName",
            )
        if not self.primary_admin_id:
            raise InvalidArgumentException(
                "Campus needs a primary admin", field="adminId"
            )

    @property
    def admin_ids(self) -> list[str]:
        return [self.primary_admin_id]
