"""Service configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Values are validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from smartcampus.shared.utils.datetime import resolve_zone


class Settings(BaseSettings):
    """Service settings loaded from environment and .env.

    Firebase credentials are optional at load time: without them the app
    starts, health works, and every Firebase-backed route answers INTERNAL.
    """

    # App
    app_name: str = "smartcampus"
    app_version: str = "1.0.0"
    debug: bool = False

    # Firebase: service account as a JSON string (key) or a file (path).
    firebase_service_account_key: SecretStr | None = None
    firebase_service_account_path: str | None = None
    # Overrides project_id from the service account when set.
    firebase_project_id: str | None = None
    # Defaults to "<project_id>.appspot.com".
    firebase_storage_bucket: str | None = None
    firebase_http_timeout_seconds: float = 30.0

    # Roles carried in identity custom claims
    sysadmin_role: str = "sysadmin"
    admin_claim_role: str = "admin"

    # Storage layout and deletion
    storage_root_prefix: str = "campuses"
    recursive_delete_batch_size: int = 50

    # Weekly cleanup of rejected entities (default: Sunday 00:00 Asia/Jerusalem)
    cleanup_schedule_enabled: bool = False
    cleanup_weekday: int = 6  # Monday=0 ... Sunday=6
    cleanup_hour: int = 0
    cleanup_minute: int = 0
    cleanup_timezone: str = "Asia/Jerusalem"

    # Sysadmin notification recipients (comma-separated)
    sysadmin_notify_emails: str = ""

    # SMTP relay for sysadmin notifications; without SMTP_HOST they are only logged.
    smtp_host: str | None = None
    smtp_port: int = 587
    smtp_username: str | None = None
    smtp_password: SecretStr | None = None
    # Defaults to SMTP_USERNAME.
    smtp_sender: str | None = None
    smtp_start_tls: bool = True
    smtp_use_tls: bool = False
    smtp_timeout_seconds: float = 30.0

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Request / middleware
    request_id_header: str = "X-Request-ID"
    correlation_id_header: str = "X-Correlation-ID"
    public_endpoint_rate_limit: str = "20/minute"

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_schedule_and_limits(self) -> "Settings":
        """Validate cleanup schedule, batch size, SMTP, and telemetry exporter."""
        if not 0 <= self.cleanup_weekday <= 6:
            raise ValueError(
                f"CLEANUP_WEEKDAY must be 0 (Monday) to 6 (Sunday), got: {self.cleanup_weekday}"
            )
        if not 0 <= self.cleanup_hour <= 23:
            raise ValueError(f"CLEANUP_HOUR must be 0-23, got: {self.cleanup_hour}")
        if not 0 <= self.cleanup_minute <= 59:
            raise ValueError(f"CLEANUP_MINUTE must be 0-59, got: {self.cleanup_minute}")
        resolve_zone(self.cleanup_timezone)
        if self.recursive_delete_batch_size < 1 or self.recursive_delete_batch_size > 500:
            raise ValueError(
                "RECURSIVE_DELETE_BATCH_SIZE must be between 1 and 500 "
                "(Firestore commit limit)."
            )
        if self.telemetry_exporter not in ("console", "otlp", "none"):
            raise ValueError(
                f"Invalid telemetry_exporter '{self.telemetry_exporter}'. "
                "Must be one of: 'console', 'otlp', 'none'"
            )
        if self.smtp_start_tls and self.smtp_use_tls:
            raise ValueError("SMTP_START_TLS and SMTP_USE_TLS cannot both be enabled.")
        if self.smtp_host and not (self.smtp_sender or self.smtp_username):
            raise ValueError("SMTP_SENDER (or SMTP_USERNAME) is required when SMTP_HOST is set.")
        if self.telemetry_exporter == "otlp" and self.telemetry_enabled and not self.telemetry_otlp_endpoint:
            raise ValueError("TELEMETRY_OTLP_ENDPOINT is required when telemetry_exporter is 'otlp'.")
        return self

    @property
    def notify_recipients(self) -> list[str]:
        return [e.strip() for e in self.sysadmin_notify_emails.split(",") if e.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return cached service settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
