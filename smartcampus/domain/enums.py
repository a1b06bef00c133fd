"""Domain enumerations for the SmartCampus service.

Enums represent fixed sets of domain values (entity status, step outcomes).
"""

from enum import Enum


class EntityStatus(str, Enum):
    """Lifecycle status shared by Campus and Admin documents.

    Always persisted lowercase. REJECT marks an entity for physical deletion
    by the cleanup sweep.
    """

    PENDING = "pending"
    ACTIVE = "active"
    REJECT = "reject"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid status values as strings.

        Returns:
            List of enum value strings (e.g. for validation or error messages).
        """
        return [status.value for status in cls]

    @classmethod
    def parse(cls, value: object) -> "EntityStatus | None":
        """Parse a raw value case-insensitively; return None when it is not a known status.

        Stored documents written by older clients may carry "Pending" or
        surrounding whitespace, so both are normalized here.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


class TransitionKind(str, Enum):
    """Class of a legal status change; decides the cascade applied to admins."""

    ACTIVATE = "activate"
    REJECT = "reject"
    DEMOTE = "demote"


class StepOutcome(str, Enum):
    """Outcome of one sub-step of a multi-step operation (claims, account, blobs)."""

    APPLIED = "applied"
    SKIPPED_NOT_FOUND = "skipped_not_found"
    FAILED = "failed"
