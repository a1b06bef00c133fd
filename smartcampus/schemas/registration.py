"""Registration API schemas (new campus, request to manage an existing one)."""

from pydantic import EmailStr, Field

from smartcampus.application.dtos.registration import CampusRegistration, ManageRequest
from smartcampus.schemas.base import CamelModel


class _AdminFields(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    admin_name: str
    role: str
    campus_name: str
    employee_approval_file_url: str | None = Field(
        default=None, alias="employeeApprovalFileURL"
    )
    admin_photo_url: str | None = Field(default=None, alias="adminPhotoURL")


class CampusRegistrationRequest(_AdminFields):
    """New campus plus its primary admin. File fields carry already-uploaded URLs."""

    city: str
    country: str
    description: str = ""
    logo_url: str = Field(default="", alias="logoURL")
    map_image_url: str = Field(default="", alias="mapImageURL")

    def to_dto(self) -> CampusRegistration:
        return CampusRegistration(
            email=str(self.email),
            password=self.password,
            admin_name=self.admin_name,
            role=self.role,
            campus_name=self.campus_name,
            city=self.city,
            country=self.country,
            description=self.description,
            logo_url=self.logo_url,
            map_image_url=self.map_image_url,
            employee_approval_file_url=self.employee_approval_file_url,
            admin_photo_url=self.admin_photo_url,
        )


class ManageRequestBody(_AdminFields):
    """Request to be added as an admin of an existing campus."""

    def to_dto(self) -> ManageRequest:
        return ManageRequest(
            email=str(self.email),
            password=self.password,
            admin_name=self.admin_name,
            role=self.role,
            campus_name=self.campus_name,
            employee_approval_file_url=self.employee_approval_file_url,
            admin_photo_url=self.admin_photo_url,
        )


class RegistrationResponse(CamelModel):
    success: bool = True
    message: str
    admin_id: str
    campus_id: str
