"""Shared utilities: datetime helpers."""

from smartcampus.shared.utils.datetime import ensure_utc, resolve_zone, utc_now

__all__ = [
    "utc_now",
    "ensure_utc",
    "resolve_zone",
]
