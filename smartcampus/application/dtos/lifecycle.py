"""Results of status transitions, deletions, and cleanup sweeps."""

from dataclasses import dataclass, field

from smartcampus.domain.enums import EntityStatus, StepOutcome, TransitionKind


@dataclass(frozen=True)
class StepResult:
    """Outcome of one sub-step (claims update, account deletion, blob deletion, ...)."""

    step: str
    outcome: StepOutcome
    detail: str = ""


@dataclass(frozen=True)
class StatusChangeResult:
    """Result of set_admin_status / set_campus_status."""

    entity_id: str
    previous: str
    new_status: EntityStatus
    kind: TransitionKind
    message: str
    admins_updated: int = 0
    steps: tuple[StepResult, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class DeletionResult:
    """Result of delete_admin / delete_campus.

    deleted is False when the target document did not exist (nothing touched).
    campus_deleted is True when deleting an admin emptied and removed its campus.
    """

    entity_id: str
    deleted: bool
    campus_deleted: bool = False
    blobs_deleted: int = 0
    steps: tuple[StepResult, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class CleanupResult:
    """Result of one cleanup sweep over rejected admins and campuses."""

    deleted_admins: int
    deleted_campuses: int
    cascaded_campuses: int = 0
