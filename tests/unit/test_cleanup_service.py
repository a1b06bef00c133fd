"""Unit tests for CleanupService.cleanup_rejected."""

import pytest

from smartcampus.application.services.cascading_deletion_service import (
    CascadingDeletionService,
)
from smartcampus.application.services.cleanup_service import CleanupService
from tests.fakes import (
    FakeBlobStore,
    FakeIdentityGateway,
    InMemoryAdminRepository,
    InMemoryCampusRepository,
)


@pytest.fixture
def campuses() -> InMemoryCampusRepository:
    return InMemoryCampusRepository()


@pytest.fixture
def admins() -> InMemoryAdminRepository:
    return InMemoryAdminRepository()


@pytest.fixture
def svc(campuses, admins) -> CleanupService:
    deletion = CascadingDeletionService(
        campuses, admins, FakeIdentityGateway(), FakeBlobStore()
    )
    return CleanupService(campuses, admins, deletion)


async def test_cleanup_deletes_rejected_admins_then_rejected_campuses(
    svc, campuses, admins
) -> None:
    campuses.add("c1", status="active", admin_ids=["a1", "a2"])
    admins.add("a1", "a1@x.test", "c1", status="reject")
    admins.add("a2", "a2@x.test", "c1", status="active")
    campuses.add("c2", status="reject", admin_ids=["a3"])
    admins.add("a3", "a3@x.test", "c2", status="pending")
    campuses.add("c3", status="pending", admin_ids=[])

    result = await svc.cleanup_rejected()

    assert result.deleted_admins == 1
    assert result.deleted_campuses == 1
    assert result.cascaded_campuses == 0
    assert set(admins.docs) == {"a2"}
    assert set(campuses.docs) == {"c1", "c3"}
    assert campuses.docs["c1"]["adminId"] == ["a2"]


async def test_cleanup_skips_campus_already_handled_through_its_admin(
    svc, campuses, admins
) -> None:
    """A rejected campus whose only admin is rejected is deleted once, by cascade."""
    campuses.add("c1", status="reject", admin_ids=["a1"])
    admins.add("a1", "a1@x.test", "c1", status="reject")

    result = await svc.cleanup_rejected()

    assert result.deleted_admins == 1
    assert result.deleted_campuses == 0
    assert result.cascaded_campuses == 1
    assert campuses.docs == {}


async def test_cleanup_skips_rejected_campus_that_still_has_admins_after_admin_phase(
    svc, campuses, admins
) -> None:
    """The campus of a rejected admin is excluded from the campus phase even if it survives."""
    campuses.add("c1", status="reject", admin_ids=["a1", "a2"])
    admins.add("a1", "a1@x.test", "c1", status="reject")
    admins.add("a2", "a2@x.test", "c1", status="pending")

    result = await svc.cleanup_rejected()

    assert result.deleted_campuses == 0
    assert "c1" in campuses.docs


async def test_cleanup_is_idempotent(svc, campuses, admins) -> None:
    campuses.add("c1", status="reject")
    admins.add("a1", "a1@x.test", "c9", status="reject")

    first = await svc.cleanup_rejected()
    second = await svc.cleanup_rejected()

    assert (first.deleted_admins, first.deleted_campuses) == (1, 1)
    assert (second.deleted_admins, second.deleted_campuses) == (0, 0)
