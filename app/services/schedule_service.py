"""Weekly schedule service for clinics and provider branches."""

from datetime import time
from enum import Enum
from typing import Any
from uuid import UUID

import structlog
from sqlalchemy import Table, and_, delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.availability.stores import WeeklyScheduleEntry
from app.config import settings
from app.core.redis_client import CacheManager
from app.models.provider_branches import provider_branches
from app.models.schedules import clinic_schedules, provider_schedules
from app.schemas.schedules import (
    DAY_NAMES,
    DaySchedule,
    WeeklyScheduleResponse,
    WeeklyScheduleUpdate,
    day_name_to_number,
    day_number_to_name,
    default_day_schedule,
)

logger = structlog.get_logger()

DAY_ABBREVIATIONS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


class ScheduleOwner(str, Enum):
    """Who a weekly template belongs to."""

    CLINIC = "clinic"
    BRANCH = "branch"


def _table_for(owner: ScheduleOwner) -> tuple[Table, str]:
    if owner == ScheduleOwner.CLINIC:
        return clinic_schedules, "clinic_id"
    return provider_schedules, "branch_id"


def _entry_from_row(row: Any) -> WeeklyScheduleEntry:
    return WeeklyScheduleEntry(
        day_of_week=row["day_of_week"],
        enabled=row["enabled"],
        start_time=row["start_time"],
        end_time=row["end_time"],
        break_start=row["break_start"],
        break_end=row["break_end"],
    )


def _entry_to_cache(entry: WeeklyScheduleEntry) -> dict:
    return {
        "day_of_week": entry.day_of_week,
        "enabled": entry.enabled,
        "start_time": entry.start_time.isoformat() if entry.start_time else None,
        "end_time": entry.end_time.isoformat() if entry.end_time else None,
        "break_start": entry.break_start.isoformat() if entry.break_start else None,
        "break_end": entry.break_end.isoformat() if entry.break_end else None,
    }


def _entry_from_cache(data: dict) -> WeeklyScheduleEntry:
    def parse(value: str | None) -> time | None:
        return time.fromisoformat(value) if value else None

    return WeeklyScheduleEntry(
        day_of_week=data["day_of_week"],
        enabled=data["enabled"],
        start_time=parse(data["start_time"]),
        end_time=parse(data["end_time"]),
        break_start=parse(data["break_start"]),
        break_end=parse(data["break_end"]),
    )


def summarize_weekly_schedule(entries: list[WeeklyScheduleEntry], today_index: int) -> str:
    """
    One-line, human-readable summary of a weekly template.

    Args:
        entries: Stored entries of the template (any order)
        today_index: Civil day of week for "today" (0=Monday)

    Returns:
        "Mon - Fri: 09:00 - 17:00" when every enabled day shares the same
        hours, otherwise today's hours or "Today: Closed".
    """
    if not entries:
        return "Schedule not available"

    active = [
        e for e in entries if e.enabled and e.start_time is not None and e.end_time is not None
    ]
    if not active:
        return "Temporarily unavailable"

    def fmt(value: time | None) -> str:
        return value.strftime("%H:%M") if value is not None else ""

    first_start = fmt(active[0].start_time)
    first_end = fmt(active[0].end_time)
    homogeneous = all(
        fmt(e.start_time) == first_start and fmt(e.end_time) == first_end for e in active
    )

    if homogeneous:
        active.sort(key=lambda e: e.day_of_week)
        start_day = DAY_ABBREVIATIONS[active[0].day_of_week]
        end_day = DAY_ABBREVIATIONS[active[-1].day_of_week]
        if len(active) == 1:
            return f"{start_day} {first_start} - {first_end}"
        return f"{start_day} - {end_day}: {first_start} - {first_end}"

    today = next((e for e in active if e.day_of_week == today_index), None)
    if today is None:
        return "Today: Closed"
    return f"Today: {fmt(today.start_time)} - {fmt(today.end_time)}"


class ScheduleService:
    """Service for weekly schedule templates."""

    def __init__(self, db: AsyncSession, cache_manager: CacheManager | None = None):
        """Initialize service with database session and optional cache manager."""
        self.db = db
        self.cache = cache_manager

    @staticmethod
    def _get_entry_cache_key(owner: ScheduleOwner, owner_id: UUID, day_of_week: int) -> str:
        """Generate cache key for one weekly entry."""
        return f"schedule:{owner.value}:{owner_id}:{day_of_week}"

    async def get_entry(
        self,
        owner: ScheduleOwner,
        owner_id: UUID,
        day_of_week: int,
    ) -> WeeklyScheduleEntry | None:
        """
        Get the template entry of one owner for one day of week.

        Args:
            owner: Clinic or branch
            owner_id: Clinic or branch ID
            day_of_week: 0=Monday .. 6=Sunday

        Returns:
            Entry or None when the day has no stored row
        """
        cache_key = self._get_entry_cache_key(owner, owner_id, day_of_week)
        if self.cache:
            cached = self.cache.get_json(cache_key)
            if cached:
                return _entry_from_cache(cached)

        table, owner_column = _table_for(owner)
        query = select(table).where(
            and_(
                table.c[owner_column] == owner_id,
                table.c.day_of_week == day_of_week,
            )
        )
        result = await self.db.execute(query)
        row = result.mappings().first()
        if not row:
            return None

        entry = _entry_from_row(row)
        # A replace committed after our read can be overwritten here with the
        # old entry; the short TTL bounds how long it is served.
        if self.cache and settings.schedule_cache_ttl:
            self.cache.set_json(cache_key, _entry_to_cache(entry), ttl=settings.schedule_cache_ttl)
        return entry

    async def get_clinic_schedule(
        self, clinic_id: UUID, day_of_week: int
    ) -> WeeklyScheduleEntry | None:
        """Get the clinic template entry for a day of week."""
        return await self.get_entry(ScheduleOwner.CLINIC, clinic_id, day_of_week)

    async def get_provider_schedule(
        self, branch_id: UUID, day_of_week: int
    ) -> WeeklyScheduleEntry | None:
        """Get the branch template entry for a day of week."""
        return await self.get_entry(ScheduleOwner.BRANCH, branch_id, day_of_week)

    async def get_branch(self, branch_id: UUID) -> dict | None:
        """Get an active branch by ID."""
        query = select(provider_branches).where(
            and_(
                provider_branches.c.id == branch_id,
                provider_branches.c.is_active.is_(True),
            )
        )
        result = await self.db.execute(query)
        branch = result.mappings().first()
        return dict(branch) if branch else None

    async def resolve_branch_id(self, provider_id: UUID, branch_id: UUID | None) -> UUID | None:
        """
        Pick the branch whose template governs an independent provider.

        Args:
            provider_id: Provider ID
            branch_id: Requested branch, or None for the provider's default

        Returns:
            Branch ID, or None if the provider owns no matching active branch
        """
        conditions = [
            provider_branches.c.provider_id == provider_id,
            provider_branches.c.is_active.is_(True),
        ]
        if branch_id is not None:
            conditions.append(provider_branches.c.id == branch_id)

        query = (
            select(provider_branches.c.id)
            .where(and_(*conditions))
            .order_by(provider_branches.c.is_main.desc(), provider_branches.c.created_at.asc())
            .limit(1)
        )
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def list_entries(self, owner: ScheduleOwner, owner_id: UUID) -> list[WeeklyScheduleEntry]:
        """List all stored entries of a template ordered by day."""
        table, owner_column = _table_for(owner)
        query = (
            select(table).where(table.c[owner_column] == owner_id).order_by(table.c.day_of_week)
        )
        result = await self.db.execute(query)
        return [_entry_from_row(row) for row in result.mappings().all()]

    async def get_weekly_schedule(
        self, owner: ScheduleOwner, owner_id: UUID
    ) -> WeeklyScheduleResponse:
        """
        Get the full seven-day template.

        Days without a usable stored row are reported disabled with default hours.
        """
        schedule = {day: default_day_schedule(day) for day in DAY_NAMES}
        for entry in await self.list_entries(owner, owner_id):
            if entry.start_time is None or entry.end_time is None:
                continue
            day = day_number_to_name(entry.day_of_week)
            # Stored rows may predate current validation rules
            schedule[day] = DaySchedule.model_construct(
                enabled=entry.enabled,
                start_time=entry.start_time,
                end_time=entry.end_time,
                break_start=entry.break_start,
                break_end=entry.break_end,
            )
        return WeeklyScheduleResponse(owner_id=owner_id, schedule=schedule)

    async def replace_weekly_schedule(
        self,
        owner: ScheduleOwner,
        owner_id: UUID,
        data: WeeklyScheduleUpdate,
    ) -> WeeklyScheduleResponse:
        """
        Replace a weekly template in one transaction.

        Args:
            owner: Clinic or branch
            owner_id: Clinic or branch ID
            data: New template; omitted days end up disabled

        Returns:
            The stored template
        """
        table, owner_column = _table_for(owner)

        await self.db.execute(delete(table).where(table.c[owner_column] == owner_id))
        rows = [
            {
                owner_column: owner_id,
                "day_of_week": day_name_to_number(day),
                "enabled": day_schedule.enabled,
                "start_time": day_schedule.start_time,
                "end_time": day_schedule.end_time,
                "break_start": day_schedule.break_start,
                "break_end": day_schedule.break_end,
            }
            for day, day_schedule in data.schedule.items()
        ]
        if rows:
            await self.db.execute(insert(table), rows)
        await self.db.commit()

        # Invalidate cache
        if self.cache:
            self.cache.delete_pattern(f"schedule:{owner.value}:{owner_id}:*")

        logger.info(
            "weekly_schedule_replaced",
            owner=owner.value,
            owner_id=str(owner_id),
            days=len(rows),
        )
        return await self.get_weekly_schedule(owner, owner_id)
