"""Admin and campus lifecycle endpoints (status changes and deletion)."""

from httpx import AsyncClient

from smartcampus.application.dtos.caller import CallerContext
from tests.fakes import CAMPUS_ADMIN, SYSADMIN, Backend


async def test_set_admin_status_activates_and_sets_claims(
    client: AsyncClient, backend: Backend
) -> None:
    backend.admins.add("a1", "a1@x.test", "c1", status="pending")
    backend.identity.add_account("a1@x.test", "a1")

    response = await client.post("/api/v1/admins/a1/status", json={"newStatus": "active"})

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["previousStatus"] == "pending"
    assert data["newStatus"] == "active"
    assert data["adminsUpdated"] == 1
    assert data["message"] == "Admin a1@x.test status updated to ACTIVE and custom claims handled."
    assert backend.identity.claims["a1"] == {"role": "admin", "campusId": "c1"}


async def test_set_admin_status_invalid_value(client: AsyncClient, backend: Backend) -> None:
    backend.admins.add("a1", "a1@x.test", "c1")
    response = await client.post("/api/v1/admins/a1/status", json={"newStatus": "approved"})
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "INVALID_ARGUMENT"
    assert body["details"] == {"field": "newStatus"}


async def test_set_admin_status_same_status_is_failed_precondition(
    client: AsyncClient, backend: Backend
) -> None:
    backend.admins.add("a1", "a1@x.test", "c1", status="active")
    response = await client.post("/api/v1/admins/a1/status", json={"newStatus": "active"})
    assert response.status_code == 400
    assert response.json()["error"] == "FAILED_PRECONDITION"


async def test_non_sysadmin_is_forbidden(client: AsyncClient, backend: Backend) -> None:
    backend.caller = CAMPUS_ADMIN
    backend.admins.add("a1", "a1@x.test", "c1")
    response = await client.post("/api/v1/admins/a1/status", json={"newStatus": "active"})
    assert response.status_code == 403
    assert response.json()["details"] == {"required_role": "sysadmin"}
    assert backend.admins.docs["a1"]["status"] == "pending"


async def test_unknown_admin_is_not_found(client: AsyncClient, backend: Backend) -> None:
    response = await client.post("/api/v1/admins/zz/status", json={"newStatus": "active"})
    assert response.status_code == 404
    assert response.json()["error"] == "NOT_FOUND"


async def test_set_campus_status_cascades(client: AsyncClient, backend: Backend) -> None:
    backend.campuses.add("c1", status="active", admin_ids=["a1", "a2"])
    for uid in ("a1", "a2"):
        backend.admins.add(uid, f"{uid}@x.test", "c1", status="active")
        backend.identity.add_account(f"{uid}@x.test", uid)

    response = await client.post("/api/v1/campuses/c1/status", json={"newStatus": "reject"})

    assert response.status_code == 200
    data = response.json()
    assert data["adminsUpdated"] == 2
    assert data["message"] == "Campus status updated to 'reject' (from 'active'), 2 admin(s) updated."
    assert [s["outcome"] for s in data["steps"]] == ["applied", "applied"]
    assert backend.admins.docs["a2"]["status"] == "reject"


async def test_delete_admin_cascades_to_empty_campus(
    client: AsyncClient, backend: Backend
) -> None:
    backend.campuses.add("c1", name="Afeka", admin_ids=["a1"], storage_folder="Afeka")
    backend.admins.add("a1", "a1@x.test", "c1")
    backend.identity.add_account("a1@x.test", "a1")

    response = await client.delete("/api/v1/admins/a1")

    assert response.status_code == 200
    assert response.json()["campusDeleted"] is True
    assert backend.campuses.docs == {}
    assert backend.blobs.prefixes == ["campuses/Afeka/Meta/a1/", "campuses/Afeka/"]


async def test_delete_self_is_refused(client: AsyncClient, backend: Backend) -> None:
    backend.admins.add("a1", SYSADMIN.email.upper(), "c1")
    response = await client.delete("/api/v1/admins/a1")
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "FAILED_PRECONDITION"
    assert body["message"] == "Sysadmin cannot delete themselves."
    assert "a1" in backend.admins.docs


async def test_delete_campus_twice(client: AsyncClient, backend: Backend) -> None:
    backend.campuses.add("c1", name="Afeka", admin_ids=["a1"], storage_folder="Afeka")
    backend.admins.add("a1", "a1@x.test", "c1")

    first = await client.delete("/api/v1/campuses/c1")
    second = await client.delete("/api/v1/campuses/c1")

    assert first.status_code == 200
    assert backend.admins.docs == {}
    assert second.status_code == 404


async def test_unauthenticated_delete(client: AsyncClient, backend: Backend) -> None:
    backend.caller = None
    response = await client.delete("/api/v1/campuses/c1")
    assert response.status_code == 401


async def test_cleanup_endpoint(client: AsyncClient, backend: Backend) -> None:
    backend.campuses.add("c1", status="reject")
    backend.admins.add("a1", "a1@x.test", "c9", status="reject")

    response = await client.post("/api/v1/maintenance/cleanup-rejected")

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "deletedAdmins": 1,
        "deletedCampuses": 1,
        "cascadedCampuses": 0,
    }


async def test_cleanup_endpoint_requires_sysadmin(
    client: AsyncClient, backend: Backend
) -> None:
    backend.caller = CallerContext(uid="u1", role="admin")
    backend.campuses.add("c1", status="reject")
    response = await client.post("/api/v1/maintenance/cleanup-rejected")
    assert response.status_code == 403
    assert "c1" in backend.campuses.docs
