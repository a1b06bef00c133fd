"""Admin domain entity and authorization claims."""

from dataclasses import dataclass

from smartcampus.domain.enums import EntityStatus
from smartcampus.domain.exceptions import InvalidArgumentException

ADMIN_CLAIM_ROLE = "admin"


def admin_claims(campus_id: str, role: str = ADMIN_CLAIM_ROLE) -> dict[str, str]:
    """Return the custom claims an active admin of campus_id holds."""
    return {"role": role, "campusId": campus_id}


@dataclass
class AdminEntity:
    """An admin profile about to be created (registration or request-to-manage).

    The id is the identity-provider uid. New admins are always pending.
    """

    id: str
    admin_name: str
    email: str
    role: str
    campus_id: str
    employee_approval_file_url: str | None = None
    admin_photo_url: str | None = None
    status: EntityStatus = EntityStatus.PENDING

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate admin business rules. Raises InvalidArgumentException if invalid."""
        if not self.id:
            raise InvalidArgumentException("Admin ID is required", field="adminId")
        if not self.email or "@" not in self.email:
            raise InvalidArgumentException("A valid email is required", field="email")
        if not self.admin_name or not self.admin_name.strip():
            raise InvalidArgumentException("Admin name is required", field="adminName")
        if not self.campus_id:
            raise InvalidArgumentException("Admin must reference a campus", field="campusId")
