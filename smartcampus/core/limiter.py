"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules can use the same
instance without circular imports. Limits apply to the unauthenticated
endpoints (existence checks and registration).
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from smartcampus.core.config import get_settings

limiter = Limiter(key_func=get_remote_address)


def _public_limit() -> str:
    return get_settings().public_endpoint_rate_limit


REGISTRATION_LIMIT = "5/minute"

limit_public = limiter.limit(_public_limit)
limit_registration = limiter.limit(REGISTRATION_LIMIT)
