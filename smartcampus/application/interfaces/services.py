"""Service interfaces (ports) for the application layer.

Protocols for the identity provider, blob storage, and notifications.
"""

from __future__ import annotations

from typing import Any, Protocol


class IIdentityGateway(Protocol):
    """Protocol for the identity provider (accounts and custom claims)."""

    async def get_uid_by_email(self, email: str) -> str | None:
        """Return the account uid for email, or None when no account exists."""
        ...

    async def create_user(self, email: str, password: str) -> str:
        """Create an account and return its uid.

        Raises AlreadyExistsException when the email is taken.
        """
        ...

    async def delete_user(self, uid: str) -> bool:
        """Delete the account; return False when it did not exist."""
        ...

    async def set_custom_claims(self, uid: str, claims: dict[str, Any] | None) -> None:
        """Replace the account's custom claims; None clears them."""
        ...

    async def update_password(self, uid: str, password: str) -> None:
        """Set a new password on the account."""
        ...


class IBlobStore(Protocol):
    """Protocol for blob storage."""

    async def delete_prefix(self, prefix: str) -> int:
        """Delete every object whose name starts with prefix; return the count deleted.

        Objects already gone count as deleted. Any other failure raises.
        """
        ...


class INotificationService(Protocol):
    """Protocol for sending notifications (e.g. email to sysadmins)."""

    async def send(
        self,
        to_emails: list[str],
        subject: str,
        body: str,
    ) -> None:
        """Send a notification. Failures are logged, not raised."""
        ...


class ITokenVerifier(Protocol):
    """Protocol for verifying caller ID tokens."""

    async def verify(self, token: str) -> dict[str, Any]:
        """Return the verified token claims.

        Raises UnauthenticatedException when the token is invalid or expired.
        """
        ...
