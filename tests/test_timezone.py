"""Tests for civil time normalization."""

from datetime import UTC, date, datetime, time, timedelta, timezone

from app.availability.timezone import (
    CIVIL_TZ,
    at_civil_time,
    civil_date,
    clock_face,
    format_hhmm,
    to_civil,
)


def test_civil_zone_is_fixed_offset():
    """The civil zone is UTC-5 with no daylight saving."""
    assert CIVIL_TZ.utcoffset(None) == timedelta(hours=-5)
    january = datetime(2026, 1, 15, 12, 0, tzinfo=CIVIL_TZ)
    july = datetime(2026, 7, 15, 12, 0, tzinfo=CIVIL_TZ)
    assert january.utcoffset() == july.utcoffset()


def test_to_civil_converts_aware_instants():
    """Aware instants keep their moment and change only their offset."""
    utc_instant = datetime(2026, 10, 21, 15, 0, tzinfo=UTC)
    civil = to_civil(utc_instant)
    assert civil == utc_instant
    assert (civil.hour, civil.minute) == (10, 0)


def test_to_civil_treats_naive_as_utc():
    """Naive values from the database driver are UTC."""
    civil = to_civil(datetime(2026, 10, 21, 15, 0))
    assert civil.utcoffset() == timedelta(hours=-5)
    assert (civil.hour, civil.minute) == (10, 0)


def test_civil_date_crosses_midnight():
    """03:00 UTC is still the previous evening in civil time."""
    assert civil_date(datetime(2026, 10, 20, 3, 0, tzinfo=UTC)) == date(2026, 10, 19)
    assert civil_date(datetime(2026, 10, 20, 5, 0, tzinfo=UTC)) == date(2026, 10, 20)


def test_clock_face_of_time_and_datetime():
    """Time-of-day reads the same whether stored as time or datetime."""
    assert clock_face(time(9, 30)) == (9, 30)
    assert clock_face(datetime(1970, 1, 1, 9, 30)) == (9, 30)
    # Aware datetimes are read on the UTC clock face
    plus_two = timezone(timedelta(hours=2))
    assert clock_face(datetime(1970, 1, 1, 11, 30, tzinfo=plus_two)) == (9, 30)


def test_at_civil_time_anchors_and_zeroes_seconds():
    """Stored times become civil instants on the target date."""
    instant = at_civil_time(date(2026, 10, 21), time(9, 0, 45))
    assert instant == datetime(2026, 10, 21, 9, 0, tzinfo=CIVIL_TZ)
    assert instant.second == 0
    assert instant.tzinfo == CIVIL_TZ


def test_at_civil_time_independent_of_datetime_date_part():
    """The date part of a datetime-typed time value is ignored."""
    instant = at_civil_time(date(2026, 10, 21), datetime(1970, 1, 1, 13, 0))
    assert instant == datetime(2026, 10, 21, 13, 0, tzinfo=CIVIL_TZ)


def test_format_hhmm_uses_civil_wall_clock():
    """Formatting converts to civil time first."""
    assert format_hhmm(datetime(2026, 10, 21, 14, 30, tzinfo=UTC)) == "09:30"
    assert format_hhmm(datetime(2026, 10, 21, 9, 5, tzinfo=CIVIL_TZ)) == "09:05"
