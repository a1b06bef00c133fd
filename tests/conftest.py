"""Pytest configuration and fixtures for smartcampus.

Uses smartcampus.main:app for HTTP tests. Firebase adapters are replaced via
app.dependency_overrides with the in-memory fakes from tests.fakes, so no
test talks to Google APIs.
"""

from collections.abc import AsyncIterator, Iterator

import pytest
from httpx import ASGITransport, AsyncClient

from smartcampus.api.v1 import dependencies as deps
from smartcampus.application.dtos.caller import CallerContext
from smartcampus.core.limiter import limiter
from smartcampus.domain.exceptions import UnauthenticatedException
from smartcampus.main import app
from tests.fakes import Backend


@pytest.fixture(autouse=True)
def reset_rate_limits() -> None:
    """Rate-limit counters are process-wide; start each test from zero."""
    limiter.reset()


@pytest.fixture
async def client() -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def backend() -> Iterator[Backend]:
    """Install in-memory fakes for every Firebase-backed dependency."""
    b = Backend()

    def caller() -> CallerContext:
        if b.caller is None:
            raise UnauthenticatedException("Missing Bearer ID token.")
        return b.caller

    app.dependency_overrides[deps.get_campus_repo] = lambda: b.campuses
    app.dependency_overrides[deps.get_admin_repo] = lambda: b.admins
    app.dependency_overrides[deps.get_identity_gateway] = lambda: b.identity
    app.dependency_overrides[deps.get_blob_store] = lambda: b.blobs
    app.dependency_overrides[deps.get_notification_service] = lambda: b.notifier
    app.dependency_overrides[deps.get_registration_store] = lambda: b.registrations
    app.dependency_overrides[deps.get_caller] = caller
    yield b
    app.dependency_overrides.clear()
