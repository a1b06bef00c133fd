"""Status change, deletion, and cleanup API schemas."""

from pydantic import Field

from smartcampus.application.dtos.lifecycle import (
    CleanupResult,
    DeletionResult,
    StatusChangeResult,
)
from smartcampus.schemas.base import CamelModel


class NewStatusRequest(CamelModel):
    """Body for admin/campus status changes. Value is validated by the service."""

    new_status: str | None = Field(default=None, description="pending, active or reject")


class StepResultItem(CamelModel):
    step: str
    outcome: str
    detail: str = ""


class StatusChangeResponse(CamelModel):
    success: bool = True
    message: str
    previous_status: str
    new_status: str
    admins_updated: int = 0
    steps: list[StepResultItem] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: StatusChangeResult) -> "StatusChangeResponse":
        return cls(
            message=result.message,
            previous_status=result.previous,
            new_status=result.new_status.value,
            admins_updated=result.admins_updated,
            steps=[
                StepResultItem(step=s.step, outcome=s.outcome.value, detail=s.detail)
                for s in result.steps
            ],
        )


class DeletionResponse(CamelModel):
    success: bool = True
    message: str
    campus_deleted: bool = False
    blobs_deleted: int = 0

    @classmethod
    def for_admin(cls, result: DeletionResult) -> "DeletionResponse":
        message = f"Admin {result.entity_id} deleted."
        if result.campus_deleted:
            message = f"Admin {result.entity_id} deleted; campus left without admins was deleted."
        return cls(
            message=message,
            campus_deleted=result.campus_deleted,
            blobs_deleted=result.blobs_deleted,
        )

    @classmethod
    def for_campus(cls, result: DeletionResult) -> "DeletionResponse":
        return cls(
            message=f"Campus {result.entity_id} and its admins deleted.",
            campus_deleted=True,
            blobs_deleted=result.blobs_deleted,
        )


class CleanupResponse(CamelModel):
    success: bool = True
    deleted_admins: int
    deleted_campuses: int
    cascaded_campuses: int = 0

    @classmethod
    def from_result(cls, result: CleanupResult) -> "CleanupResponse":
        return cls(
            deleted_admins=result.deleted_admins,
            deleted_campuses=result.deleted_campuses,
            cascaded_campuses=result.cascaded_campuses,
        )
