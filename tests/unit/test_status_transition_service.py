"""Unit tests for StatusTransitionService (admin/campus status, claim sync, cascade)."""

import pytest

from smartcampus.application.dtos.caller import CallerContext
from smartcampus.application.services.authorization_service import AuthorizationService
from smartcampus.application.services.status_transition_service import (
    StatusTransitionService,
)
from smartcampus.domain.enums import EntityStatus, StepOutcome, TransitionKind
from smartcampus.domain.exceptions import (
    FailedPreconditionException,
    InternalException,
    InvalidArgumentException,
    PermissionDeniedException,
    ResourceNotFoundException,
    TransitionNotAllowedException,
    UnauthenticatedException,
)
from tests.fakes import (
    FakeIdentityGateway,
    InMemoryAdminRepository,
    InMemoryCampusRepository,
)

SYSADMIN = CallerContext(uid="s1", email="root@x.test", role="sysadmin")


@pytest.fixture
def campuses() -> InMemoryCampusRepository:
    return InMemoryCampusRepository()


@pytest.fixture
def admins() -> InMemoryAdminRepository:
    return InMemoryAdminRepository()


@pytest.fixture
def identity() -> FakeIdentityGateway:
    return FakeIdentityGateway()


@pytest.fixture
def svc(campuses, admins, identity) -> StatusTransitionService:
    return StatusTransitionService(campuses, admins, identity, AuthorizationService())


async def test_activate_admin_sets_claims(svc, admins, identity) -> None:
    admins.add("a1", "a1@x.test", "c1", status="pending")
    identity.add_account("a1@x.test", "a1")

    result = await svc.set_admin_status("a1", "active", SYSADMIN)

    assert admins.docs["a1"]["status"] == "active"
    assert identity.claims["a1"] == {"role": "admin", "campusId": "c1"}
    assert result.kind is TransitionKind.ACTIVATE
    assert result.previous == "pending"
    assert result.message == (
        "Admin a1@x.test status updated to ACTIVE and custom claims handled."
    )


async def test_reject_admin_clears_claims(svc, admins, identity) -> None:
    admins.add("a1", "a1@x.test", "c1", status="active")
    identity.add_account("a1@x.test", "a1")
    identity.claims["a1"] = {"role": "admin", "campusId": "c1"}

    await svc.set_admin_status("a1", "REJECT", SYSADMIN)

    assert admins.docs["a1"]["status"] == "reject"
    assert identity.claims["a1"] is None


async def test_admin_without_account_skips_claims(svc, admins) -> None:
    admins.add("a1", "ghost@x.test", "c1", status="pending")

    result = await svc.set_admin_status("a1", "active", SYSADMIN)

    assert admins.docs["a1"]["status"] == "active"
    assert result.steps[0].outcome is StepOutcome.SKIPPED_NOT_FOUND


async def test_admin_claims_failure_propagates_after_status_write(
    svc, admins, identity
) -> None:
    """The status write is kept even though the claims update fails."""
    admins.add("a1", "a1@x.test", "c1", status="pending")
    identity.add_account("a1@x.test", "a1")
    identity.failing_claims.add("a1")

    with pytest.raises(InternalException):
        await svc.set_admin_status("a1", "active", SYSADMIN)
    assert admins.docs["a1"]["status"] == "active"


async def test_admin_same_status_is_rejected(svc, admins) -> None:
    admins.add("a1", "a1@x.test", "c1", status="active")
    with pytest.raises(TransitionNotAllowedException):
        await svc.set_admin_status("a1", "active", SYSADMIN)


async def test_admin_status_precondition_order(svc, admins) -> None:
    with pytest.raises(UnauthenticatedException):
        await svc.set_admin_status("a1", "active", None)
    with pytest.raises(PermissionDeniedException):
        await svc.set_admin_status(
            "a1", "active", CallerContext(uid="u", role="admin", campus_id="c1")
        )
    with pytest.raises(InvalidArgumentException):
        await svc.set_admin_status("", "active", SYSADMIN)
    with pytest.raises(InvalidArgumentException) as exc_info:
        await svc.set_admin_status("a1", "approved", SYSADMIN)
    assert exc_info.value.details == {"field": "newStatus"}
    with pytest.raises(ResourceNotFoundException):
        await svc.set_admin_status("a1", "active", SYSADMIN)

    admins.add("a2", "", "c1")
    with pytest.raises(FailedPreconditionException):
        await svc.set_admin_status("a2", "active", SYSADMIN)


async def test_activate_campus_activates_primary_admin_only(
    svc, campuses, admins, identity
) -> None:
    campuses.add("c1", status="pending", admin_ids=["a1", "a2"])
    for uid in ("a1", "a2"):
        admins.add(uid, f"{uid}@x.test", "c1", status="pending")
        identity.add_account(f"{uid}@x.test", uid)

    result = await svc.set_campus_status("c1", "active", SYSADMIN)

    assert campuses.docs["c1"]["status"] == "active"
    assert admins.docs["a1"]["status"] == "active"
    assert admins.docs["a2"]["status"] == "pending"
    assert identity.claims == {"a1": {"role": "admin", "campusId": "c1"}}
    assert result.admins_updated == 1
    assert result.message == (
        "Campus status updated to 'active' (from 'pending'), 1 admin(s) updated."
    )


async def test_reject_campus_rejects_every_admin_and_clears_claims(
    svc, campuses, admins, identity
) -> None:
    campuses.add("c1", status="active", admin_ids=["a1", "a2", "gone"])
    for uid in ("a1", "a2"):
        admins.add(uid, f"{uid}@x.test", "c1", status="active")
        identity.add_account(f"{uid}@x.test", uid)
        identity.claims[uid] = {"role": "admin", "campusId": "c1"}

    result = await svc.set_campus_status("c1", "reject", SYSADMIN)

    assert admins.docs["a1"]["status"] == "reject"
    assert admins.docs["a2"]["status"] == "reject"
    assert identity.claims == {"a1": None, "a2": None}
    assert result.admins_updated == 2
    assert result.steps[-1].step == "admin:gone"
    assert result.steps[-1].outcome is StepOutcome.SKIPPED_NOT_FOUND


async def test_demote_campus_leaves_claims_alone(svc, campuses, admins, identity) -> None:
    campuses.add("c1", status="active", admin_ids=["a1"])
    admins.add("a1", "a1@x.test", "c1", status="active")
    identity.add_account("a1@x.test", "a1")
    identity.claims["a1"] = {"role": "admin", "campusId": "c1"}

    result = await svc.set_campus_status("c1", "pending", SYSADMIN)

    assert result.kind is TransitionKind.DEMOTE
    assert admins.docs["a1"]["status"] == "pending"
    assert identity.claims["a1"] == {"role": "admin", "campusId": "c1"}


async def test_campus_claims_failure_is_recorded_and_loop_continues(
    svc, campuses, admins, identity
) -> None:
    campuses.add("c1", status="pending", admin_ids=["a1", "a2"])
    for uid in ("a1", "a2"):
        admins.add(uid, f"{uid}@x.test", "c1", status="pending")
        identity.add_account(f"{uid}@x.test", uid)
    identity.failing_claims.add("a1")

    result = await svc.set_campus_status("c1", "reject", SYSADMIN)

    assert [s.outcome for s in result.steps] == [StepOutcome.FAILED, StepOutcome.APPLIED]
    assert identity.claims == {"a2": None}
    assert result.admins_updated == 2


async def test_campus_not_found_and_unknown_stored_status(svc, campuses) -> None:
    with pytest.raises(ResourceNotFoundException):
        await svc.set_campus_status("nope", "active", SYSADMIN)

    campuses.add("c1", status="archived")
    with pytest.raises(TransitionNotAllowedException):
        await svc.set_campus_status("c1", "active", SYSADMIN)
    assert campuses.docs["c1"]["status"] == "archived"



async def test_campus_deleted_before_status_write_stops_the_cascade(
    svc, campuses, admins, identity
) -> None:
    campuses.add("c1", status="pending", admin_ids=["a1"])
    admins.add("a1", "a1@x.test", "c1", status="pending")
    identity.add_account("a1@x.test", "a1")
    campuses.vanish_on_update.add("c1")

    with pytest.raises(ResourceNotFoundException):
        await svc.set_campus_status("c1", "active", SYSADMIN)

    assert admins.docs["a1"]["status"] == "pending"
    assert "a1" not in identity.claims


async def test_campus_status_value_is_stored_lowercase(svc, campuses) -> None:
    campuses.add("c1", status="Pending")
    result = await svc.set_campus_status("c1", "Active", SYSADMIN)
    assert campuses.docs["c1"]["status"] == "active"
    assert result.new_status is EntityStatus.ACTIVE
