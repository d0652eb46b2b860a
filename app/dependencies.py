"""FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.availability.clock import Clock, SystemClock
from app.core.redis_client import CacheManager, get_redis_client
from app.database import get_db, get_session_factory
from app.services.availability_service import AvailabilityService
from app.services.availability_stores import DatabaseStores


def get_cache_manager() -> CacheManager:
    """Get a cache manager over the shared Redis client."""
    return CacheManager(get_redis_client())


def get_clock() -> Clock:
    """Get the clock used for same-day and past-date rules."""
    return SystemClock()


def get_availability_service(
    session_factory: Annotated[async_sessionmaker[AsyncSession], Depends(get_session_factory)],
    cache_manager: Annotated[CacheManager | None, Depends(get_cache_manager)],
    clock: Annotated[Clock, Depends(get_clock)],
) -> AvailabilityService:
    """
    Build the availability service for one request.

    Args:
        session_factory: Factory used to open one session per store read
        cache_manager: Cache for weekly schedule entries
        clock: Current civil time source

    Returns:
        Availability service wired to the database stores
    """
    stores = DatabaseStores(session_factory, cache_manager)
    return AvailabilityService(
        schedules=stores,
        affiliations=stores,
        appointments=stores,
        blocks=stores,
        clock=clock,
    )


# Type aliases for dependency injection
DatabaseSession = Annotated[AsyncSession, Depends(get_db)]
CacheManagerDep = Annotated[CacheManager | None, Depends(get_cache_manager)]
ClockDep = Annotated[Clock, Depends(get_clock)]
AvailabilityServiceDep = Annotated[AvailabilityService, Depends(get_availability_service)]
