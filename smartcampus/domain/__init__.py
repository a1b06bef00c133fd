"""Domain layer: entities, enums, transition rules, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from smartcampus.domain.entities import AdminEntity, CampusEntity
from smartcampus.domain.enums import EntityStatus, StepOutcome, TransitionKind
from smartcampus.domain.exceptions import (
    AlreadyExistsException,
    FailedPreconditionException,
    InternalException,
    InvalidArgumentException,
    PermissionDeniedException,
    ResourceNotFoundException,
    SelfDeletionException,
    SmartCampusException,
    TransitionNotAllowedException,
    UnauthenticatedException,
)
from smartcampus.domain.transitions import (
    ALLOWED_TRANSITIONS,
    classify_transition,
    ensure_transition_allowed,
)

__all__ = [
    # Entities
    "AdminEntity",
    "CampusEntity",
    # Enums
    "EntityStatus",
    "StepOutcome",
    "TransitionKind",
    # Exceptions
    "AlreadyExistsException",
    "FailedPreconditionException",
    "InternalException",
    "InvalidArgumentException",
    "PermissionDeniedException",
    "ResourceNotFoundException",
    "SelfDeletionException",
    "SmartCampusException",
    "TransitionNotAllowedException",
    "UnauthenticatedException",
    # Transitions
    "ALLOWED_TRANSITIONS",
    "classify_transition",
    "ensure_transition_allowed",
]
