"""
API v1 router.

Aggregates all v1 endpoints.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import checkins, coach, proposals, readiness, settings, workouts

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(
    checkins.router, prefix="/checkins", tags=["Check-ins"]
)
api_router.include_router(
    readiness.router, prefix="/readiness", tags=["Readiness"]
)
api_router.include_router(
    proposals.router, prefix="/proposals", tags=["Proposals"]
)
api_router.include_router(
    workouts.router, prefix="/workouts", tags=["Workouts"]
)
api_router.include_router(
    coach.router, prefix="/coach", tags=["Coach"]
)
api_router.include_router(
    settings.router, prefix="/settings", tags=["Settings"]
)
