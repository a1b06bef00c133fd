"""Tests for domain exceptions (error_code, message, details, to_dict)."""

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
from smartcampus.infrastructure.exceptions import (
    DocumentExistsError,
    DocumentNotFoundError,
    FirebaseAPIError,
)


def test_base_exception_defaults_error_code_to_class_name() -> None:
    exc = SmartCampusException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "SmartCampusException"
    assert exc.details == {}
    assert str(exc) == "Something failed"


def test_to_dict_shape() -> None:
    exc = InvalidArgumentException("Missing email.", field="email")
    assert exc.to_dict() == {
        "error": "INVALID_ARGUMENT",
        "message": "Missing email.",
        "details": {"field": "email"},
    }


def test_error_codes() -> None:
    assert UnauthenticatedException().error_code == "UNAUTHENTICATED"
    assert PermissionDeniedException().error_code == "PERMISSION_DENIED"
    assert ResourceNotFoundException("campus", "c1").error_code == "NOT_FOUND"
    assert FailedPreconditionException("no").error_code == "FAILED_PRECONDITION"
    assert AlreadyExistsException("campus", "X").error_code == "ALREADY_EXISTS"
    assert InternalException().error_code == "INTERNAL"


def test_permission_denied_carries_required_role() -> None:
    exc = PermissionDeniedException("Only sysadmin", required_role="sysadmin")
    assert exc.details == {"required_role": "sysadmin"}


def test_not_found_details() -> None:
    exc = ResourceNotFoundException("admin", "a1")
    assert exc.message == "admin not found: a1"
    assert exc.details == {"resource_type": "admin", "resource_id": "a1"}


def test_transition_and_self_deletion_are_failed_preconditions() -> None:
    assert isinstance(
        TransitionNotAllowedException("campus", "c1", "active", "active"),
        FailedPreconditionException,
    )
    exc = SelfDeletionException("a1")
    assert isinstance(exc, FailedPreconditionException)
    assert exc.message == "Sysadmin cannot delete themselves."
    assert exc.details == {"admin_id": "a1"}


def test_provider_errors_map_to_internal() -> None:
    exc = FirebaseAPIError("identity", 400, "WEAK_PASSWORD")
    assert isinstance(exc, InternalException)
    assert exc.error_code == "INTERNAL"
    assert exc.reason == "WEAK_PASSWORD"
    assert exc.details["service"] == "identity"
    assert DocumentExistsError().status_code == 409
    assert DocumentNotFoundError().reason == "NOT_FOUND"
