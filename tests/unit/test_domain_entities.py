"""Tests for CampusEntity, AdminEntity and blob path helpers."""

import pytest

from smartcampus.domain.entities.admin import AdminEntity, admin_claims
from smartcampus.domain.entities.campus import (
    CampusEntity,
    admin_blob_prefix,
    campus_blob_prefix,
    derive_storage_folder,
)
from smartcampus.domain.enums import EntityStatus
from smartcampus.domain.exceptions import InvalidArgumentException


@pytest.mark.parametrize(
    "name,folder",
    [
        ("Tel Aviv Univ.", "Tel Aviv Univ_"),
        ("  a/b\\c?d%e*f:g|h\"i<j>k ", "a_b_c_d_e_f_g_h_i_j_k"),
        ("Plain", "Plain"),
    ],
)
def test_derive_storage_folder(name, folder) -> None:
    assert derive_storage_folder(name) == folder


def test_blob_prefixes() -> None:
    assert campus_blob_prefix("campuses", "Afeka") == "campuses/Afeka/"
    assert admin_blob_prefix("campuses", "Afeka", "u1") == "campuses/Afeka/Meta/u1/"


def test_new_campus_is_pending_with_primary_admin_and_folder() -> None:
    campus = CampusEntity(
        id="c1", name="Afeka College", city="Tel Aviv", country="IL", primary_admin_id="u1"
    )
    assert campus.status is EntityStatus.PENDING
    assert campus.admin_ids == ["u1"]
    assert campus.storage_folder == "Afeka College"


def test_campus_keeps_explicit_storage_folder() -> None:
    campus = CampusEntity(
        id="c1",
        name="Renamed",
        city="x",
        country="y",
        primary_admin_id="u1",
        storage_folder="Original",
    )
    assert campus.storage_folder == "Original"


@pytest.mark.parametrize("name", ["", "   ", "..."])
def test_campus_rejects_unusable_names(name) -> None:
    with pytest.raises(InvalidArgumentException):
        CampusEntity(id="c1", name=name, city="x", country="y", primary_admin_id="u1")


def test_campus_requires_primary_admin() -> None:
    with pytest.raises(InvalidArgumentException) as exc_info:
        CampusEntity(id="c1", name="A", city="x", country="y", primary_admin_id="")
    assert exc_info.value.details == {"field": "adminId"}


def test_admin_entity_validation() -> None:
    admin = AdminEntity(
        id="u1", admin_name="Dana", email="dana@x.test", role="Dean", campus_id="c1"
    )
    assert admin.status is EntityStatus.PENDING
    with pytest.raises(InvalidArgumentException):
        AdminEntity(id="u1", admin_name="Dana", email="nope", role="Dean", campus_id="c1")
    with pytest.raises(InvalidArgumentException):
        AdminEntity(id="u1", admin_name="Dana", email="d@x.test", role="Dean", campus_id="")


def test_admin_claims() -> None:
    assert admin_claims("c1") == {"role": "admin", "campusId": "c1"}
    assert admin_claims("c1", "campus-admin") == {"role": "campus-admin", "campusId": "c1"}
