"""Tests for candidate slot generation."""

from datetime import date, datetime, time, timedelta

import pytest

from app.availability.resolver import DayWindow, build_day_window
from app.availability.slots import generate_slots, overlaps, touches_break
from app.availability.stores import WeeklyScheduleEntry
from app.availability.timezone import CIVIL_TZ, format_hhmm

DAY = date(2026, 10, 21)
THIRTY = timedelta(minutes=30)


def at(hour: int, minute: int = 0) -> datetime:
    return datetime(DAY.year, DAY.month, DAY.day, hour, minute, tzinfo=CIVIL_TZ)


def window(start, end, break_start=None, break_end=None) -> DayWindow:
    entry = WeeklyScheduleEntry(
        day_of_week=DAY.weekday(),
        enabled=True,
        start_time=start,
        end_time=end,
        break_start=break_start,
        break_end=break_end,
    )
    result = build_day_window(DAY, entry)
    assert result is not None
    return result


def labels(slots: list[datetime]) -> list[str]:
    return [format_hhmm(slot) for slot in slots]


def test_slots_skip_lunch_break():
    """09:00-17:00 with a 12:00-13:00 break."""
    slots = generate_slots(window(time(9), time(17), time(12), time(13)), THIRTY)
    assert labels(slots) == [
        "09:00", "09:30", "10:00", "10:30", "11:00", "11:30",
        "13:00", "13:30", "14:00", "14:30", "15:00", "15:30", "16:00", "16:30",
    ]  # fmt: skip


def test_slots_without_break_cover_window():
    """Slots are contiguous and the last one ends exactly at closing."""
    slots = generate_slots(window(time(8), time(12)), THIRTY)
    assert labels(slots) == ["08:00", "08:30", "09:00", "09:30", "10:00", "10:30", "11:00", "11:30"]
    assert slots[-1] + THIRTY == at(12)
    for earlier, later in zip(slots, slots[1:]):
        assert later - earlier == THIRTY


def test_partial_last_slot_is_dropped():
    """A window that does not divide evenly loses its tail."""
    slots = generate_slots(window(time(9), time(10, 45)), THIRTY)
    assert labels(slots) == ["09:00", "09:30", "10:00"]


def test_window_shorter_than_a_slot_is_empty():
    assert generate_slots(window(time(9), time(9, 20)), THIRTY) == []


def test_unaligned_break_drops_every_touching_slot():
    """Slots starting or ending inside the break are dropped, not truncated."""
    slots = generate_slots(window(time(9), time(14), time(12, 15), time(12, 45)), THIRTY)
    assert "12:00" not in labels(slots)
    assert "12:30" not in labels(slots)
    assert "11:30" in labels(slots)
    assert "13:00" in labels(slots)


def test_slot_enclosing_short_break_is_dropped():
    """A break shorter than a slot still removes the slot around it."""
    slots = generate_slots(window(time(9), time(11), time(10, 5), time(10, 20)), THIRTY)
    assert labels(slots) == ["09:00", "09:30", "10:30"]


def test_no_slot_intersects_break():
    """Break exclusion holds for any returned slot."""
    w = window(time(7), time(19), time(12, 10), time(13, 50))
    for slot in generate_slots(w, THIRTY):
        assert not overlaps(slot, slot + THIRTY, w.break_start, w.break_end)


def test_generate_slots_rejects_non_positive_duration():
    with pytest.raises(ValueError):
        generate_slots(window(time(9), time(17)), timedelta(0))


def test_touches_break_edges():
    """Ending at break start or starting at break end is allowed."""
    assert not touches_break(at(11, 30), at(12), at(12), at(13))
    assert not touches_break(at(13), at(13, 30), at(12), at(13))
    assert touches_break(at(12), at(12, 30), at(12), at(13))
    assert touches_break(at(12, 30), at(13), at(12), at(13))


def test_overlaps_is_half_open():
    assert overlaps(at(10), at(10, 30), at(10), at(11))
    assert not overlaps(at(9, 30), at(10), at(10), at(11))
    assert not overlaps(at(11), at(11, 30), at(10), at(11))
