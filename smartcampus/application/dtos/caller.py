"""Caller identity passed explicitly into every privileged operation."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CallerContext:
    """Verified identity of the request caller (from a Firebase ID token).

    role and campus_id come from custom claims and are None when absent.
    """

    uid: str
    email: str | None = None
    role: str | None = None
    campus_id: str | None = None

    def has_role(self, role: str) -> bool:
        return self.role == role
