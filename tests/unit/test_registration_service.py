"""Unit tests for RegistrationService (new campus, request to manage, rollback)."""

from dataclasses import replace

import pytest

from smartcampus.application.dtos.registration import CampusRegistration, ManageRequest
from smartcampus.application.services.registration_service import RegistrationService
from smartcampus.domain.exceptions import (
    AlreadyExistsException,
    InvalidArgumentException,
    ResourceNotFoundException,
)
from smartcampus.infrastructure.exceptions import FirebaseAPIError
from tests.fakes import (
    FakeIdentityGateway,
    FakeNotifier,
    InMemoryAdminRepository,
    InMemoryCampusRepository,
    InMemoryRegistrationStore,
)

NEW_CAMPUS = CampusRegistration(
    email="dana@afeka.test",
    password="secret123",
    admin_name="Dana",
    role="Dean",
    campus_name="Afeka College",
    city="Tel Aviv",
    country="Israel",
    logo_url="https://cdn.test/logo.png",
)


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
def store(campuses, admins) -> InMemoryRegistrationStore:
    return InMemoryRegistrationStore(campuses, admins)


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
def svc(campuses, identity, store, notifier) -> RegistrationService:
    return RegistrationService(
        campuses,
        identity,
        store,
        notifier,
        notify_recipients=["ops@campus.test"],
        id_factory=lambda: "campus-1",
    )


async def test_register_campus_creates_pending_campus_and_admin(
    svc, campuses, admins, identity, store, notifier
) -> None:
    result = await svc.register_campus(NEW_CAMPUS)

    assert result.campus_id == "campus-1"
    assert result.admin_id == identity.uid_for("dana@afeka.test")
    assert result.storage_folder == "Afeka College"
    campus = campuses.docs["campus-1"]
    assert campus["status"] == "pending"
    assert campus["adminId"] == [result.admin_id]
    assert "campus-1" in store.placeholders
    assert admins.docs[result.admin_id]["status"] == "pending"
    assert admins.docs[result.admin_id]["campusId"] == "campus-1"
    to, subject, body = notifier.sent[0]
    assert to == ["ops@campus.test"]
    assert subject == "New Campus Management Request"
    assert "dana@afeka.test" in body


async def test_register_campus_rejects_duplicate_name_case_insensitively(
    svc, campuses, identity
) -> None:
    campuses.add("c0", name="  afeka college ")
    with pytest.raises(AlreadyExistsException) as exc_info:
        await svc.register_campus(NEW_CAMPUS)
    assert exc_info.value.details["resource_type"] == "campus"
    assert identity.accounts == {}


async def test_register_campus_rejects_name_sharing_a_storage_folder(
    svc, campuses, identity
) -> None:
    await svc.register_campus(replace(NEW_CAMPUS, campus_name="Tel.Aviv"))
    assert campuses.docs["campus-1"]["storageFolder"] == "Tel_Aviv"

    with pytest.raises(AlreadyExistsException) as exc_info:
        await svc.register_campus(
            replace(NEW_CAMPUS, email="noa@afeka.test", campus_name="Tel_Aviv")
        )

    assert exc_info.value.details == {
        "resource_type": "campus storage folder",
        "key": "Tel_Aviv",
    }
    assert identity.uid_for("noa@afeka.test") is None
    assert list(campuses.docs) == ["campus-1"]


async def test_register_campus_rejects_folder_already_in_use(svc, campuses) -> None:
    campuses.add("c0", name="Afeka Old", storage_folder="Afeka College")
    with pytest.raises(AlreadyExistsException):
        await svc.register_campus(NEW_CAMPUS)


async def test_register_campus_rejects_taken_email(svc, identity) -> None:
    identity.add_account("dana@afeka.test", "existing")
    with pytest.raises(AlreadyExistsException) as exc_info:
        await svc.register_campus(NEW_CAMPUS)
    assert exc_info.value.details["resource_type"] == "account"


@pytest.mark.parametrize("field", ["email", "password", "admin_name", "city", "country"])
async def test_register_campus_requires_fields(svc, field) -> None:
    with pytest.raises(InvalidArgumentException) as exc_info:
        await svc.register_campus(replace(NEW_CAMPUS, **{field: " "}))
    assert exc_info.value.message == "Missing required form fields."


async def test_register_campus_rolls_back_account_when_commit_fails(
    svc, campuses, identity, store, notifier
) -> None:
    store.fail = True

    with pytest.raises(FirebaseAPIError):
        await svc.register_campus(NEW_CAMPUS)

    assert identity.accounts == {}
    assert identity.deleted == ["uid-1"]
    assert campuses.docs == {}
    assert notifier.sent == []


async def test_request_manage_enrolls_pending_admin(
    svc, campuses, admins, identity, notifier
) -> None:
    campuses.add("c1", name="Afeka College", status="active", admin_ids=["a1"], storage_folder="Afeka College")

    result = await svc.request_manage(
        ManageRequest(
            email="new@afeka.test",
            password="secret123",
            admin_name="Noa",
            role="IT",
            campus_name="Afeka College",
        )
    )

    assert result.campus_id == "c1"
    assert campuses.docs["c1"]["adminId"] == ["a1", result.admin_id]
    assert campuses.docs["c1"]["status"] == "active"
    assert admins.docs[result.admin_id]["status"] == "pending"
    assert notifier.sent[0][1] == "New Request to Manage Existing Campus"


async def test_request_manage_unknown_campus_creates_no_account(svc, identity) -> None:
    with pytest.raises(ResourceNotFoundException):
        await svc.request_manage(
            ManageRequest(
                email="new@afeka.test",
                password="secret123",
                admin_name="Noa",
                role="IT",
                campus_name="afeka college",
            )
        )
    assert identity.accounts == {}


async def test_request_manage_rolls_back_when_campus_disappears(
    svc, campuses, identity, store
) -> None:
    campuses.add("c1", name="Afeka College")
    store.fail = True
    with pytest.raises(FirebaseAPIError):
        await svc.request_manage(
            ManageRequest(
                email="new@afeka.test",
                password="secret123",
                admin_name="Noa",
                role="IT",
                campus_name="Afeka College",
            )
        )
    assert identity.accounts == {}
