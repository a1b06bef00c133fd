"""Status transition table shared by Campus and Admin.

One canonical table for both entity kinds: every change between two
different statuses is allowed, and a request for the current status is not.
The transition kind decides how a campus change cascades to its admins.
"""

from smartcampus.domain.enums import EntityStatus, TransitionKind
from smartcampus.domain.exceptions import TransitionNotAllowedException

_P = EntityStatus.PENDING
_A = EntityStatus.ACTIVE
_R = EntityStatus.REJECT

ALLOWED_TRANSITIONS: dict[tuple[EntityStatus, EntityStatus], TransitionKind] = {
    (_P, _A): TransitionKind.ACTIVATE,
    (_R, _A): TransitionKind.ACTIVATE,
    (_A, _R): TransitionKind.REJECT,
    (_P, _R): TransitionKind.REJECT,
    (_A, _P): TransitionKind.DEMOTE,
    (_R, _P): TransitionKind.DEMOTE,
}


def classify_transition(
    current: EntityStatus | None, requested: EntityStatus
) -> TransitionKind | None:
    """Return the transition kind, or None when the pair is not allowed.

    An unknown current status (None) never transitions.
    """
    if current is None:
        return None
    return ALLOWED_TRANSITIONS.get((current, requested))


def ensure_transition_allowed(
    entity_type: str,
    entity_id: str,
    current: EntityStatus | None,
    requested: EntityStatus,
    raw_current: str = "",
) -> TransitionKind:
    """Return the transition kind or raise TransitionNotAllowedException.

    Args:
        entity_type: 'campus' or 'admin' (for the error details).
        entity_id: Document id (for the error details).
        current: Parsed current status, None when the stored value is unknown.
        requested: Requested status.
        raw_current: Stored value as read, used in the message when unknown.
    """
    kind = classify_transition(current, requested)
    if kind is None:
        raise TransitionNotAllowedException(
            entity_type=entity_type,
            entity_id=entity_id,
            from_status=current.value if current is not None else raw_current,
            to_status=requested.value,
        )
    return kind
