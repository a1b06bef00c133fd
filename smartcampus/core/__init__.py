"""Core: config, error mapping, lifespan, rate limiting, and the cleanup scheduler."""

from smartcampus.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
