"""Narrowing stages applied to candidate slots, in pipeline order."""

from collections.abc import Iterable
from datetime import date, datetime, timedelta

from app.availability.slots import overlaps
from app.availability.stores import AppointmentRecord, BlockedRange, DateBlock
from app.availability.timezone import at_civil_time, civil_date, to_civil
from app.schemas.appointments import TERMINAL_STATUSES


def filter_conflicts(
    slots: list[datetime],
    appointments: Iterable[AppointmentRecord],
) -> list[datetime]:
    """
    Drop slots whose start equals a booked appointment start.

    Appointments are always created on the slot grid, so exact instant
    matching is enough.
    """
    occupied = {
        to_civil(appointment.scheduled_for)
        for appointment in appointments
        if appointment.status.upper() not in TERMINAL_STATUSES
    }
    return [slot for slot in slots if slot not in occupied]


def _intervals(
    day: date,
    ranges: Iterable[BlockedRange | DateBlock],
) -> list[tuple[datetime, datetime]]:
    intervals = []
    for block in ranges:
        if block.start_time is None or block.end_time is None:
            continue
        start = at_civil_time(day, block.start_time)
        end = at_civil_time(day, block.end_time)
        if start < end:
            intervals.append((start, end))
    return intervals


def filter_blocked(
    slots: list[datetime],
    day: date,
    ranges: Iterable[BlockedRange | DateBlock],
    duration: timedelta,
) -> list[datetime]:
    """Drop slots overlapping any blocked interval; blocks accumulate."""
    intervals = _intervals(day, ranges)
    if not intervals:
        return slots
    return [
        slot
        for slot in slots
        if not any(overlaps(slot, slot + duration, start, end) for start, end in intervals)
    ]


def has_full_day_block(blocks: Iterable[DateBlock]) -> bool:
    return any(block.is_full_day for block in blocks)


def apply_temporal_policy(
    slots: list[datetime],
    day: date,
    now: datetime,
    lead_time: timedelta,
) -> list[datetime]:
    """
    Remove slots that can no longer be booked.

    Past dates yield nothing. Today keeps only slots starting strictly after
    now + lead_time. Future dates are untouched.
    """
    today = civil_date(now)
    if day < today:
        return []
    if day == today:
        buffer_instant = to_civil(now) + lead_time
        return [slot for slot in slots if slot > buffer_instant]
    return slots
