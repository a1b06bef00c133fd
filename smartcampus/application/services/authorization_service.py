"""Authorization service: role checks on the explicit caller context."""

from __future__ import annotations

from smartcampus.application.dtos.caller import CallerContext
from smartcampus.domain.exceptions import (
    PermissionDeniedException,
    UnauthenticatedException,
)


class AuthorizationService:
    """Centralized caller checks; every privileged operation goes through require_sysadmin."""

    def __init__(self, sysadmin_role: str = "sysadmin") -> None:
        self.sysadmin_role = sysadmin_role

    def require_authenticated(self, caller: CallerContext | None) -> CallerContext:
        """Raise UnauthenticatedException when there is no caller."""
        if caller is None or not caller.uid:
            raise UnauthenticatedException()
        return caller

    def require_sysadmin(self, caller: CallerContext | None) -> CallerContext:
        """Raise Unauthenticated (no caller) or PermissionDenied (caller lacks the sysadmin role)."""
        caller = self.require_authenticated(caller)
        if not caller.has_role(self.sysadmin_role):
            raise PermissionDeniedException(
                "Only sysadmin can perform this operation.",
                required_role=self.sysadmin_role,
            )
        return caller
