"""Health check schema."""

from smartcampus.schemas.base import CamelModel


class HealthResponse(CamelModel):
    status: str
    firebase: str
    version: str
