"""Database-backed collaborators for the availability engine."""

from datetime import date, datetime
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.availability.stores import (
    Affiliation,
    AppointmentRecord,
    BlockedRange,
    DateBlock,
    WeeklyScheduleEntry,
)
from app.core.redis_client import CacheManager
from app.services.appointment_service import AppointmentService
from app.services.block_service import BlockService
from app.services.clinic_service import ClinicService
from app.services.schedule_service import ScheduleService


class DatabaseStores:
    """
    Implements every store protocol over the SQL services.

    Each call opens its own session so the engine can gather independent
    reads concurrently.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        cache_manager: CacheManager | None = None,
    ):
        self.session_factory = session_factory
        self.cache = cache_manager

    async def get_clinic_schedule(
        self, clinic_id: UUID, day_of_week: int
    ) -> WeeklyScheduleEntry | None:
        async with self.session_factory() as db:
            return await ScheduleService(db, self.cache).get_clinic_schedule(clinic_id, day_of_week)

    async def get_provider_schedule(
        self, branch_id: UUID, day_of_week: int
    ) -> WeeklyScheduleEntry | None:
        async with self.session_factory() as db:
            return await ScheduleService(db, self.cache).get_provider_schedule(
                branch_id, day_of_week
            )

    async def resolve_branch_id(self, provider_id: UUID, branch_id: UUID | None) -> UUID | None:
        async with self.session_factory() as db:
            return await ScheduleService(db, self.cache).resolve_branch_id(provider_id, branch_id)

    async def get_active_clinic_affiliation(self, provider_id: UUID) -> Affiliation | None:
        async with self.session_factory() as db:
            return await ClinicService(self.cache).get_active_clinic_affiliation(db, provider_id)

    async def list_appointments(
        self, provider_id: UUID, from_instant: datetime, to_instant: datetime
    ) -> list[AppointmentRecord]:
        async with self.session_factory() as db:
            return await AppointmentService(db).list_appointments(
                provider_id, from_instant, to_instant
            )

    async def list_blocked_ranges(self, branch_id: UUID, day: date) -> list[BlockedRange]:
        async with self.session_factory() as db:
            return await BlockService(db).list_blocked_ranges(branch_id, day)

    async def list_approved_date_blocks(
        self, clinic_id: UUID, doctor_id: UUID, day: date
    ) -> list[DateBlock]:
        async with self.session_factory() as db:
            return await BlockService(db).list_approved_date_blocks(clinic_id, doctor_id, day)
