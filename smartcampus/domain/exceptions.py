"""Domain exceptions for the SmartCampus service.

Defines domain-level exceptions that represent business rule violations.
Each carries a canonical error code (the same status names Firebase callable
functions use) so the presentation layer can map them to HTTP responses.
"""

from typing import Any


class SmartCampusException(Exception):
    """Base exception for all SmartCampus application errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body used by HTTP handlers."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class UnauthenticatedException(SmartCampusException):
    """Raised when the request carries no (valid) caller identity."""

    def __init__(self, message: str = "You must be signed in.") -> None:
        super().__init__(message, "UNAUTHENTICATED")


class PermissionDeniedException(SmartCampusException):
    """Raised when the caller lacks the role required for the operation."""

    def __init__(
        self,
        message: str = "Permission denied",
        required_role: str | None = None,
    ) -> None:
        """Initialize with message and optional required role.

        Args:
            message: Human-readable message.
            required_role: Role the caller would need (e.g. 'sysadmin').
        """
        details = {"required_role": required_role} if required_role else {}
        super().__init__(message, "PERMISSION_DENIED", details)


class InvalidArgumentException(SmartCampusException):
    """Raised when a required field is missing or malformed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "INVALID_ARGUMENT", details)


class ResourceNotFoundException(SmartCampusException):
    """Raised when a referenced document or account is absent."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'campus', 'admin').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class FailedPreconditionException(SmartCampusException):
    """Raised when the system state does not allow the operation."""

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message, "FAILED_PRECONDITION", details)


class TransitionNotAllowedException(FailedPreconditionException):
    """Raised when a status change is not in the transition table."""

    def __init__(
        self,
        entity_type: str,
        entity_id: str,
        from_status: str,
        to_status: str,
    ) -> None:
        """Initialize with the rejected transition.

        Args:
            entity_type: 'campus' or 'admin'.
            entity_id: Document id of the entity.
            from_status: Current stored status (raw string when unknown).
            to_status: Requested status.
        """
        super().__init__(
            f"Transition from {from_status or '<none>'} to {to_status} is not allowed.",
            entity_type=entity_type,
            entity_id=entity_id,
            from_status=from_status,
            to_status=to_status,
        )


class SelfDeletionException(FailedPreconditionException):
    """Raised when a sysadmin tries to delete the admin profile bound to their own email."""

    def __init__(self, admin_id: str) -> None:
        super().__init__("Sysadmin cannot delete themselves.", admin_id=admin_id)


class AlreadyExistsException(SmartCampusException):
    """Raised when creating a campus name or account email that is already taken."""

    def __init__(self, resource_type: str, key: str) -> None:
        super().__init__(
            f"{resource_type} already exists: {key}",
            "ALREADY_EXISTS",
            {"resource_type": resource_type, "key": key},
        )


class InternalException(SmartCampusException):
    """Raised when a provider call fails unexpectedly (document store, identity, storage)."""

    def __init__(self, message: str = "Internal error", **details: Any) -> None:
        super().__init__(message, "INTERNAL", details)
