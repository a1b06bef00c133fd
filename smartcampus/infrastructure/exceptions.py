"""Infrastructure exceptions for the Firebase REST adapters.

They extend InternalException so presentation maps any provider failure
to INTERNAL (HTTP 500) without special handling.
"""

from smartcampus.domain.exceptions import InternalException


class FirebaseAPIError(InternalException):
    """A Google REST API call failed (Firestore, Identity Toolkit, Cloud Storage).

    Attributes:
        service: 'firestore', 'identity', or 'storage'.
        status_code: HTTP status returned by the API.
        reason: Provider error code (e.g. EMAIL_EXISTS, FAILED_PRECONDITION).
    """

    def __init__(
        self,
        service: str,
        status_code: int,
        reason: str = "",
        message: str | None = None,
    ) -> None:
        self.service = service
        self.status_code = status_code
        self.reason = reason
        super().__init__(
            message or f"{service} request failed ({status_code}): {reason or 'unknown error'}",
            service=service,
            status_code=status_code,
            reason=reason,
        )


class DocumentExistsError(FirebaseAPIError):
    """Raised when a create (or a write with exists=false precondition) hits an existing document."""

    def __init__(self, message: str = "Document already exists") -> None:
        super().__init__("firestore", 409, "ALREADY_EXISTS", message)


class DocumentNotFoundError(FirebaseAPIError):
    """Raised when a committed write requires a document that does not exist."""

    def __init__(self, message: str = "Document not found") -> None:
        super().__init__("firestore", 404, "NOT_FOUND", message)
