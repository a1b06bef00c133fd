"""Shared utilities: telemetry and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from smartcampus.shared.utils import ensure_utc, resolve_zone, utc_now

__all__ = [
    "utc_now",
    "ensure_utc",
    "resolve_zone",
]
