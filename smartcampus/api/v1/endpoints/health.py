"""Health check endpoint. No dependencies; used for liveness checks."""

from fastapi import APIRouter, Request

from smartcampus.core.config import get_settings
from smartcampus.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check(request: Request) -> HealthResponse:
    """Return ok plus whether the Firebase clients came up at startup."""
    ready = getattr(request.app.state, "firebase_ready", False)
    return HealthResponse(
        status="ok",
        firebase="ready" if ready else "not_configured",
        version=get_settings().app_version,
    )
