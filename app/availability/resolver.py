"""Decide which weekly template governs a provider on a given date."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

import structlog

from app.availability.stores import AffiliationStore, ScheduleStore, WeeklyScheduleEntry
from app.availability.timezone import at_civil_time

logger = structlog.get_logger()


@dataclass(frozen=True)
class DayWindow:
    """Working hours of one civil date, as absolute instants."""

    start: datetime
    end: datetime
    break_start: datetime | None = None
    break_end: datetime | None = None

    @property
    def has_break(self) -> bool:
        return self.break_start is not None and self.break_end is not None


@dataclass(frozen=True)
class ClinicSource:
    """The clinic's shared template governs; blocks come from approved date requests."""

    clinic_id: UUID
    doctor_id: UUID
    window: DayWindow


@dataclass(frozen=True)
class IndependentSource:
    """The branch's own template governs; blocks come from the branch's blocked slots."""

    branch_id: UUID
    window: DayWindow


ScheduleSource = ClinicSource | IndependentSource


def build_day_window(day: date, entry: WeeklyScheduleEntry | None) -> DayWindow | None:
    """
    Anchor a weekly entry on a civil date.

    Returns None when the entry is missing, disabled, incomplete or inverted.
    A break is kept only when both ends are set and ordered.
    """
    if entry is None or not entry.enabled:
        return None
    if entry.start_time is None or entry.end_time is None:
        return None

    start = at_civil_time(day, entry.start_time)
    end = at_civil_time(day, entry.end_time)
    if start >= end:
        logger.warning(
            "schedule_entry_inverted",
            day_of_week=entry.day_of_week,
            start=start.isoformat(),
            end=end.isoformat(),
        )
        return None

    break_start = break_end = None
    if entry.break_start is not None and entry.break_end is not None:
        break_start = at_civil_time(day, entry.break_start)
        break_end = at_civil_time(day, entry.break_end)
        if break_start >= break_end:
            break_start = break_end = None

    return DayWindow(start=start, end=end, break_start=break_start, break_end=break_end)


class ScheduleResolver:
    """
    Pick exactly one schedule source per provider and date.

    A provider with an active clinic affiliation is governed by the clinic
    template only; a missing or disabled clinic day never falls back to the
    provider's own branch template.
    """

    def __init__(self, schedules: ScheduleStore, affiliations: AffiliationStore):
        self.schedules = schedules
        self.affiliations = affiliations

    async def resolve(
        self,
        provider_id: UUID,
        day: date,
        branch_id: UUID | None = None,
    ) -> ScheduleSource | None:
        day_of_week = day.weekday()

        affiliation = await self.affiliations.get_active_clinic_affiliation(provider_id)
        if affiliation is not None:
            entry = await self.schedules.get_clinic_schedule(affiliation.clinic_id, day_of_week)
            window = build_day_window(day, entry)
            if window is None:
                return None
            return ClinicSource(
                clinic_id=affiliation.clinic_id,
                doctor_id=affiliation.doctor_id,
                window=window,
            )

        resolved_branch = await self.schedules.resolve_branch_id(provider_id, branch_id)
        if resolved_branch is None:
            return None

        entry = await self.schedules.get_provider_schedule(resolved_branch, day_of_week)
        window = build_day_window(day, entry)
        if window is None:
            return None
        return IndependentSource(branch_id=resolved_branch, window=window)
