"""
Civil time normalization.

Every instant compared by the availability engine (slots, bookings, blocks,
"now") is converted through these helpers so that host or database timezone
never leaks into the result. The civil zone is a fixed offset with no
daylight saving transitions.
"""

from datetime import UTC, date, datetime, time, timedelta, timezone

from app.config import settings

CIVIL_TZ = timezone(timedelta(hours=settings.civil_utc_offset_hours))


def to_civil(instant: datetime) -> datetime:
    """Express an instant in the civil zone. Naive values are taken as UTC."""
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=UTC)
    return instant.astimezone(CIVIL_TZ)


def civil_date(instant: datetime) -> date:
    """Calendar date of an instant in the civil zone."""
    return to_civil(instant).date()


def clock_face(value: time | datetime) -> tuple[int, int]:
    """
    Hour and minute of a stored time-of-day.

    Full datetimes (time columns round-tripped through a DATE-less driver or a
    JSON cache) are read on the UTC clock face and their date part ignored.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(UTC)
        return value.hour, value.minute
    return value.hour, value.minute


def at_civil_time(day: date, value: time | datetime) -> datetime:
    """Absolute instant for `day` at the stored time-of-day, seconds zeroed."""
    hour, minute = clock_face(value)
    return datetime(day.year, day.month, day.day, hour, minute, tzinfo=CIVIL_TZ)


def format_hhmm(instant: datetime) -> str:
    """Civil wall-clock "HH:MM" for an instant."""
    return to_civil(instant).strftime("%H:%M")
