"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from smartcampus.api.v1.dependencies.
"""

from fastapi import APIRouter

from smartcampus.api.v1.endpoints import (
    accounts,
    admins,
    campuses,
    health,
    maintenance,
    registration,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(admins.router, prefix="/admins", tags=["admins"])
api_router.include_router(campuses.router, prefix="/campuses", tags=["campuses"])
api_router.include_router(accounts.router, prefix="/accounts", tags=["accounts"])
api_router.include_router(
    maintenance.router, prefix="/maintenance", tags=["maintenance"]
)
api_router.include_router(
    registration.router, prefix="/registration", tags=["registration"]
)
