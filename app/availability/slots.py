"""Candidate slot generation over a day window."""

from datetime import datetime, timedelta

from app.availability.resolver import DayWindow


def overlaps(start: datetime, end: datetime, other_start: datetime, other_end: datetime) -> bool:
    """Half-open interval overlap: [start, end) against [other_start, other_end)."""
    return start < other_end and end > other_start


def touches_break(
    slot_start: datetime,
    slot_end: datetime,
    break_start: datetime,
    break_end: datetime,
) -> bool:
    # Starting or ending inside the break drops the slot, never truncates it.
    # A slot enclosing a break shorter than itself is dropped too.
    return (
        (break_start <= slot_start < break_end)
        or (break_start < slot_end <= break_end)
        or (slot_start < break_start and slot_end > break_end)
    )


def generate_slots(window: DayWindow, duration: timedelta) -> list[datetime]:
    """
    Partition the window into contiguous, non-overlapping slots.

    Returns ascending slot start instants. The last slot must end at or
    before the window end; slots touching the break are skipped.
    """
    if duration <= timedelta(0):
        raise ValueError("Slot duration must be positive")

    slots: list[datetime] = []
    current = window.start
    while current + duration <= window.end:
        slot_end = current + duration
        in_break = window.has_break and touches_break(
            current,
            slot_end,
            window.break_start,  # type: ignore[arg-type]
            window.break_end,  # type: ignore[arg-type]
        )
        if not in_break:
            slots.append(current)
        current = slot_end
    return slots
