"""Application ports (Protocols) implemented by infrastructure adapters."""

from smartcampus.application.interfaces.repositories import (
    IAdminRepository,
    ICampusRepository,
    IRegistrationStore,
)
from smartcampus.application.interfaces.services import (
    IBlobStore,
    IIdentityGateway,
    INotificationService,
    ITokenVerifier,
)

__all__ = [
    "IAdminRepository",
    "IBlobStore",
    "ICampusRepository",
    "IIdentityGateway",
    "INotificationService",
    "IRegistrationStore",
    "ITokenVerifier",
]
