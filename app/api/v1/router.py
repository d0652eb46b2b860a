"""API v1 router configuration."""

from fastapi import APIRouter

from app.api.v1.endpoints import availability, blocks, health, schedules

api_router = APIRouter()

# Include routers
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(availability.router, prefix="/availability", tags=["Availability"])
api_router.include_router(schedules.router, tags=["Schedules"])
api_router.include_router(blocks.router, tags=["Blocks"])
