"""Tests for conflict, block and temporal filters."""

from datetime import UTC, date, datetime, time, timedelta

from app.availability.filters import (
    apply_temporal_policy,
    filter_blocked,
    filter_conflicts,
    has_full_day_block,
)
from app.availability.stores import AppointmentRecord, BlockedRange, DateBlock
from app.availability.timezone import CIVIL_TZ

DAY = date(2026, 10, 21)
THIRTY = timedelta(minutes=30)
LEAD = timedelta(minutes=30)


def at(hour: int, minute: int = 0, day: date = DAY) -> datetime:
    return datetime(day.year, day.month, day.day, hour, minute, tzinfo=CIVIL_TZ)


SLOTS = [at(9), at(9, 30), at(10), at(10, 30), at(11), at(11, 30)]


def test_conflicting_appointment_removes_slot():
    booked = [AppointmentRecord(scheduled_for=at(9, 30), status="CONFIRMED")]
    assert filter_conflicts(SLOTS, booked) == [at(9), at(10), at(10, 30), at(11), at(11, 30)]


def test_conflicts_match_across_offsets():
    """A booking stored in UTC still blocks its civil slot."""
    booked = [
        AppointmentRecord(scheduled_for=datetime(2026, 10, 21, 15, 0, tzinfo=UTC), status="PENDING"),
        # Naive driver values are UTC
        AppointmentRecord(scheduled_for=datetime(2026, 10, 21, 16, 0), status="CONFIRMED"),
    ]
    assert filter_conflicts(SLOTS, booked) == [at(9), at(9, 30), at(10, 30), at(11, 30)]


def test_terminal_statuses_do_not_occupy():
    booked = [
        AppointmentRecord(scheduled_for=at(9), status="CANCELLED"),
        AppointmentRecord(scheduled_for=at(9, 30), status="rejected"),
        AppointmentRecord(scheduled_for=at(10), status="DELETED"),
        AppointmentRecord(scheduled_for=at(10, 30), status="completed"),
    ]
    assert filter_conflicts(SLOTS, booked) == [at(9), at(9, 30), at(10), at(11), at(11, 30)]


def test_off_grid_appointment_does_not_match():
    """Conflicts compare exact start instants."""
    booked = [AppointmentRecord(scheduled_for=at(9, 15), status="CONFIRMED")]
    assert filter_conflicts(SLOTS, booked) == SLOTS


def test_blocked_range_removes_overlapping_slots():
    blocked = [BlockedRange(start_time=time(10), end_time=time(11))]
    assert filter_blocked(SLOTS, DAY, blocked, THIRTY) == [at(9), at(9, 30), at(11), at(11, 30)]


def test_partial_overlap_removes_slot():
    blocked = [BlockedRange(start_time=time(9, 45), end_time=time(10, 15))]
    assert filter_blocked(SLOTS, DAY, blocked, THIRTY) == [at(9), at(10, 30), at(11), at(11, 30)]


def test_blocks_accumulate():
    blocked = [
        DateBlock(start_time=time(9), end_time=time(9, 30)),
        DateBlock(start_time=time(11), end_time=time(12)),
    ]
    assert filter_blocked(SLOTS, DAY, blocked, THIRTY) == [at(9, 30), at(10), at(10, 30)]


def test_inverted_or_incomplete_blocks_are_ignored():
    blocked = [
        BlockedRange(start_time=time(11), end_time=time(10)),
        DateBlock(start_time=time(9), end_time=None),
    ]
    assert filter_blocked(SLOTS, DAY, blocked, THIRTY) == SLOTS


def test_full_day_block_detection():
    assert has_full_day_block([DateBlock(start_time=time(9), end_time=time(10)), DateBlock()])
    assert not has_full_day_block([DateBlock(start_time=time(9), end_time=time(10))])
    assert not has_full_day_block([])


def test_temporal_policy_past_date_is_empty():
    now = at(8, 0, day=date(2026, 10, 22))
    assert apply_temporal_policy(SLOTS, DAY, now, LEAD) == []


def test_temporal_policy_future_date_untouched():
    now = at(23, 0, day=date(2026, 10, 20))
    assert apply_temporal_policy(SLOTS, DAY, now, LEAD) == SLOTS


def test_temporal_policy_today_applies_lead_time():
    """Slots must start strictly after now + lead time."""
    assert apply_temporal_policy(SLOTS, DAY, at(8, 50), LEAD) == SLOTS[1:]
    assert apply_temporal_policy(SLOTS, DAY, at(9, 0), LEAD) == SLOTS[2:]
    assert apply_temporal_policy(SLOTS, DAY, at(11, 30), LEAD) == []


def test_temporal_policy_uses_civil_today():
    """02:00 UTC on the 22nd is still the 21st in civil time."""
    now = datetime(2026, 10, 22, 2, 0, tzinfo=UTC)
    assert apply_temporal_policy(SLOTS, DAY, now, LEAD) == []
    late_evening_slot = [at(22, 0)]
    assert apply_temporal_policy(late_evening_slot, DAY, now, LEAD) == late_evening_slot
