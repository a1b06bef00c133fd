"""Tests for EntityStatus parsing and the shared status transition table."""

import pytest

from smartcampus.domain.enums import EntityStatus, TransitionKind
from smartcampus.domain.exceptions import TransitionNotAllowedException
from smartcampus.domain.transitions import (
    ALLOWED_TRANSITIONS,
    classify_transition,
    ensure_transition_allowed,
)

P, A, R = EntityStatus.PENDING, EntityStatus.ACTIVE, EntityStatus.REJECT


def test_entity_status_values_are_lowercase() -> None:
    assert EntityStatus.values() == ["pending", "active", "reject"]


@pytest.mark.parametrize(
    "raw,expected",
    [("active", A), ("ACTIVE", A), (" Pending ", P), ("reject", R), (R, R)],
)
def test_entity_status_parse_is_case_insensitive(raw, expected) -> None:
    assert EntityStatus.parse(raw) is expected


@pytest.mark.parametrize("raw", ["approved", "", None, 3, ["active"]])
def test_entity_status_parse_unknown_returns_none(raw) -> None:
    assert EntityStatus.parse(raw) is None


def test_every_change_between_distinct_statuses_is_allowed() -> None:
    for current in EntityStatus:
        for requested in EntityStatus:
            kind = classify_transition(current, requested)
            if current is requested:
                assert kind is None
            else:
                assert kind is not None
    assert len(ALLOWED_TRANSITIONS) == 6


@pytest.mark.parametrize(
    "current,requested,kind",
    [
        (P, A, TransitionKind.ACTIVATE),
        (R, A, TransitionKind.ACTIVATE),
        (A, R, TransitionKind.REJECT),
        (P, R, TransitionKind.REJECT),
        (A, P, TransitionKind.DEMOTE),
        (R, P, TransitionKind.DEMOTE),
    ],
)
def test_transition_kinds(current, requested, kind) -> None:
    assert ensure_transition_allowed("campus", "c1", current, requested) is kind


def test_same_status_is_rejected_with_details() -> None:
    with pytest.raises(TransitionNotAllowedException) as exc_info:
        ensure_transition_allowed("admin", "a1", A, A)
    exc = exc_info.value
    assert exc.error_code == "FAILED_PRECONDITION"
    assert exc.details == {
        "entity_type": "admin",
        "entity_id": "a1",
        "from_status": "active",
        "to_status": "active",
    }


def test_unknown_current_status_never_transitions() -> None:
    """A stored status outside the enum blocks every change; the raw value is reported."""
    assert classify_transition(None, A) is None
    with pytest.raises(TransitionNotAllowedException) as exc_info:
        ensure_transition_allowed("campus", "c1", None, A, raw_current="archived")
    assert "archived" in exc_info.value.message
