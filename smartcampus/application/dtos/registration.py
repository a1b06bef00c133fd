"""DTOs for the registration workflows."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CampusRegistration:
    """Input for registering a new campus together with its primary admin.

    File URLs point to objects the client already uploaded.
    """

    email: str
    password: str
    admin_name: str
    role: str
    campus_name: str
    city: str
    country: str
    description: str = ""
    logo_url: str = ""
    map_image_url: str = ""
    employee_approval_file_url: str | None = None
    admin_photo_url: str | None = None


@dataclass(frozen=True)
class ManageRequest:
    """Input for asking to manage an existing campus."""

    email: str
    password: str
    admin_name: str
    role: str
    campus_name: str
    employee_approval_file_url: str | None = None
    admin_photo_url: str | None = None


@dataclass(frozen=True)
class RegistrationResult:
    """Created admin uid and campus id."""

    admin_id: str
    campus_id: str
    storage_folder: str
