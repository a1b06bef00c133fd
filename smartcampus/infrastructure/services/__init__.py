"""Infrastructure services that are not Firebase-specific."""

from smartcampus.infrastructure.services.notification_service import (
    LogOnlyNotificationService,
    SmtpNotificationService,
    create_notification_service,
)

__all__ = [
    "LogOnlyNotificationService",
    "SmtpNotificationService",
    "create_notification_service",
]
