"""
Read-only collaborators consumed by the availability engine.

The engine depends only on these protocols; the SQL-backed implementation
lives in `app.services.availability_stores`.
"""

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Protocol
from uuid import UUID


@dataclass(frozen=True)
class WeeklyScheduleEntry:
    """One day of a weekly template. day_of_week: 0=Monday .. 6=Sunday."""

    day_of_week: int
    enabled: bool
    start_time: time | None
    end_time: time | None
    break_start: time | None = None
    break_end: time | None = None


@dataclass(frozen=True)
class Affiliation:
    """Active clinic membership of a provider."""

    clinic_id: UUID
    doctor_id: UUID


@dataclass(frozen=True)
class AppointmentRecord:
    scheduled_for: datetime
    status: str


@dataclass(frozen=True)
class BlockedRange:
    """Manually blocked interval on one date of an independent branch."""

    start_time: time
    end_time: time


@dataclass(frozen=True)
class DateBlock:
    """Approved clinic date block; no start and no end means the whole day."""

    start_time: time | None = None
    end_time: time | None = None

    @property
    def is_full_day(self) -> bool:
        return self.start_time is None and self.end_time is None


class ScheduleStore(Protocol):
    async def get_clinic_schedule(
        self, clinic_id: UUID, day_of_week: int
    ) -> WeeklyScheduleEntry | None: ...

    async def get_provider_schedule(
        self, branch_id: UUID, day_of_week: int
    ) -> WeeklyScheduleEntry | None: ...

    async def resolve_branch_id(self, provider_id: UUID, branch_id: UUID | None) -> UUID | None:
        """The requested branch if the provider owns it, else the provider's default branch."""
        ...


class AffiliationStore(Protocol):
    async def get_active_clinic_affiliation(self, provider_id: UUID) -> Affiliation | None: ...


class AppointmentStore(Protocol):
    async def list_appointments(
        self, provider_id: UUID, from_instant: datetime, to_instant: datetime
    ) -> list[AppointmentRecord]: ...


class BlockStore(Protocol):
    async def list_blocked_ranges(self, branch_id: UUID, day: date) -> list[BlockedRange]: ...

    async def list_approved_date_blocks(
        self, clinic_id: UUID, doctor_id: UUID, day: date
    ) -> list[DateBlock]: ...
