"""Availability service: computes the bookable slots of a provider on a date."""

import asyncio
import re
from collections.abc import Coroutine
from datetime import date, datetime, timedelta
from uuid import UUID

import structlog

from app.availability.clock import Clock
from app.availability.filters import (
    apply_temporal_policy,
    filter_blocked,
    filter_conflicts,
    has_full_day_block,
)
from app.availability.resolver import ClinicSource, ScheduleResolver, ScheduleSource
from app.availability.slots import generate_slots
from app.availability.stores import (
    AffiliationStore,
    AppointmentRecord,
    AppointmentStore,
    BlockStore,
    ScheduleStore,
)
from app.availability.timezone import civil_date, format_hhmm
from app.config import settings
from app.core.exceptions import AppException, InvalidRequestException, UpstreamDataException
from app.schemas.availability import AvailabilityResponse

logger = structlog.get_logger()

DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")


def _parse_uuid(value: str | None, name: str) -> UUID | None:
    if value is None or not value.strip():
        return None
    try:
        return UUID(value.strip())
    except ValueError as e:
        raise InvalidRequestException(f"Invalid {name}: {value!r}") from e


def _parse_date(value: str | None) -> date:
    if value is None or not value.strip():
        raise InvalidRequestException("Missing required parameter: date")
    if not DATE_PATTERN.fullmatch(value.strip()):
        raise InvalidRequestException(f"Invalid date, expected YYYY-MM-DD: {value!r}")
    try:
        return date.fromisoformat(value.strip())
    except ValueError as e:
        raise InvalidRequestException(f"Invalid date, expected YYYY-MM-DD: {value!r}") from e


async def _fetch_both(first: Coroutine, second: Coroutine) -> tuple:
    """Await two reads concurrently; a failure in either cancels the other."""
    try:
        async with asyncio.TaskGroup() as tg:
            first_task = tg.create_task(first)
            second_task = tg.create_task(second)
    except ExceptionGroup as eg:
        raise eg.exceptions[0]
    return first_task.result(), second_task.result()


class AvailabilityService:
    """
    Orchestrates the availability pipeline.

    Resolve the schedule source, generate candidate slots, then narrow them
    by booked appointments, blocks and the temporal policy. The service only
    reads; the booking commit step must re-validate the chosen slot.
    """

    def __init__(
        self,
        schedules: ScheduleStore,
        affiliations: AffiliationStore,
        appointments: AppointmentStore,
        blocks: BlockStore,
        clock: Clock,
        slot_duration_minutes: int = settings.slot_duration_minutes,
        lead_time_minutes: int = settings.booking_lead_time_minutes,
    ):
        """Initialize service with its read-only collaborators and a clock."""
        self.resolver = ScheduleResolver(schedules, affiliations)
        self.appointments = appointments
        self.blocks = blocks
        self.clock = clock
        self.slot_duration = timedelta(minutes=slot_duration_minutes)
        self.lead_time = timedelta(minutes=lead_time_minutes)

    async def get_availability(
        self,
        provider_id: str | None,
        date_str: str | None,
        branch_id: str | None = None,
    ) -> AvailabilityResponse:
        """
        Compute bookable slot starts.

        Args:
            provider_id: Provider ID (required)
            date_str: Civil calendar date, YYYY-MM-DD (required)
            branch_id: Branch of an independent provider; defaults to the main branch

        Returns:
            The date and its ascending "HH:MM" slot starts; an empty list means no openings

        Raises:
            InvalidRequestException: If provider_id or date is missing or malformed
            UpstreamDataException: If any store fails
        """
        provider_uuid = _parse_uuid(provider_id, "providerId")
        if provider_uuid is None:
            raise InvalidRequestException("Missing required parameter: providerId")
        branch_uuid = _parse_uuid(branch_id, "branchId")
        target = _parse_date(date_str)

        now = self.clock.now()
        if target < civil_date(now):
            return AvailabilityResponse(date=target, available_slots=[])

        log = logger.bind(
            provider_id=str(provider_uuid),
            branch_id=str(branch_uuid) if branch_uuid else None,
            date=target.isoformat(),
        )

        try:
            slots = await self._compute(provider_uuid, branch_uuid, target, now, log)
        except AppException:
            raise
        except Exception as e:
            log.error("availability_upstream_failed", error=str(e), exc_info=True)
            raise UpstreamDataException("Failed to compute availability") from e

        available = [format_hhmm(slot) for slot in slots]
        log.info("availability_computed", slot_count=len(available))
        return AvailabilityResponse(date=target, available_slots=available)

    async def _compute(
        self,
        provider_id: UUID,
        branch_id: UUID | None,
        target: date,
        now: datetime,
        log: structlog.stdlib.BoundLogger,
    ) -> list[datetime]:
        source = await self.resolver.resolve(provider_id, target, branch_id)
        if source is None:
            log.info("availability_no_schedule")
            return []

        slots = generate_slots(source.window, self.slot_duration)
        if not slots:
            return []

        if isinstance(source, ClinicSource):
            booked, date_blocks = await _fetch_both(
                self._list_appointments(provider_id, source),
                self.blocks.list_approved_date_blocks(source.clinic_id, source.doctor_id, target),
            )
            if has_full_day_block(date_blocks):
                log.info("availability_full_day_blocked", clinic_id=str(source.clinic_id))
                return []
            slots = filter_conflicts(slots, booked)
            slots = filter_blocked(slots, target, date_blocks, self.slot_duration)
        else:
            booked, blocked_ranges = await _fetch_both(
                self._list_appointments(provider_id, source),
                self.blocks.list_blocked_ranges(source.branch_id, target),
            )
            slots = filter_conflicts(slots, booked)
            slots = filter_blocked(slots, target, blocked_ranges, self.slot_duration)

        return apply_temporal_policy(slots, target, now, self.lead_time)

    async def _list_appointments(
        self, provider_id: UUID, source: ScheduleSource
    ) -> list[AppointmentRecord]:
        return await self.appointments.list_appointments(
            provider_id, source.window.start, source.window.end
        )
