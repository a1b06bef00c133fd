"""Sysadmin notification senders (implement INotificationService).

SmtpNotificationService delivers plain-text e-mail through an SMTP relay.
LogOnlyNotificationService is used when SMTP_HOST is not configured.
A failed send is logged and never fails the registration that triggered it.
"""

from __future__ import annotations

import logging
from email.message import EmailMessage

import aiosmtplib

from smartcampus.application.interfaces.services import INotificationService
from smartcampus.core.config import Settings

logger = logging.getLogger(__name__)


def _recipients(to_emails: list[str] | None) -> list[str]:
    return [e.strip() for e in (to_emails or []) if e and e.strip()]


class LogOnlyNotificationService:
    """Logs the notification instead of sending it."""

    async def send(self, to_emails: list[str], subject: str, body: str) -> None:
        recipients = _recipients(to_emails)
        logger.warning(
            "Sysadmin notify: SMTP not configured, not sending %r to %d recipient(s)",
            (subject or "")[:80],
            len(recipients),
        )
        logger.debug("Sysadmin notify body:\n%s", body)


class SmtpNotificationService:
    """Sends one e-mail per notification to every recipient."""

    def __init__(
        self,
        hostname: str,
        port: int,
        sender: str,
        *,
        username: str | None = None,
        password: str | None = None,
        start_tls: bool = True,
        use_tls: bool = False,
        timeout: float = 30.0,
    ) -> None:
        self.hostname = hostname
        self.port = port
        self.sender = sender
        self.username = username
        self.password = password
        self.start_tls = start_tls
        self.use_tls = use_tls
        self.timeout = timeout

    def build_message(self, recipients: list[str], subject: str, body: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = ", ".join(recipients)
        message["Subject"] = subject
        message.set_content(body)
        return message

    async def send(self, to_emails: list[str], subject: str, body: str) -> None:
        recipients = _recipients(to_emails)
        if not recipients:
            logger.info("Sysadmin notify: no recipients configured (subject=%r)", subject)
            return
        try:
            await aiosmtplib.send(
                self.build_message(recipients, subject, body),
                hostname=self.hostname,
                port=self.port,
                username=self.username,
                password=self.password,
                start_tls=self.start_tls,
                use_tls=self.use_tls,
                timeout=self.timeout,
            )
        except (aiosmtplib.SMTPException, OSError):
            logger.exception(
                "Sysadmin notify: sending %r to %d recipient(s) via %s:%d failed",
                subject,
                len(recipients),
                self.hostname,
                self.port,
            )
            return
        logger.info("Sysadmin notify: sent %r to %d recipient(s)", subject, len(recipients))


def create_notification_service(settings: Settings) -> INotificationService:
    """Return the SMTP sender when SMTP_HOST is set, otherwise the log-only sender."""
    if not settings.smtp_host:
        return LogOnlyNotificationService()
    return SmtpNotificationService(
        settings.smtp_host,
        settings.smtp_port,
        settings.smtp_sender or settings.smtp_username or "",
        username=settings.smtp_username,
        password=settings.smtp_password.get_secret_value() if settings.smtp_password else None,
        start_tls=settings.smtp_start_tls,
        use_tls=settings.smtp_use_tls,
        timeout=settings.smtp_timeout_seconds,
    )
