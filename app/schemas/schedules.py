"""Weekly schedule schemas for request/response validation."""

from datetime import time
from uuid import UUID

from pydantic import BaseModel, Field, field_serializer, field_validator, model_validator

DAY_NAMES = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


def day_name_to_number(day: str) -> int:
    """Map a day name to 0=Monday .. 6=Sunday."""
    return DAY_NAMES.index(day.lower())


def day_number_to_name(day_of_week: int) -> str:
    """Map 0=Monday .. 6=Sunday to a day name."""
    return DAY_NAMES[day_of_week]


class DaySchedule(BaseModel):
    """Working hours for one day of the week."""

    enabled: bool = False
    start_time: time = Field(default=time(9, 0))
    end_time: time = Field(default=time(17, 0))
    break_start: time | None = None
    break_end: time | None = None

    @model_validator(mode="after")
    def validate_ranges(self) -> "DaySchedule":
        """Validate start < end and that a break sits inside working hours."""
        if self.start_time >= self.end_time:
            raise ValueError("start_time must be before end_time")
        if (self.break_start is None) != (self.break_end is None):
            raise ValueError("break_start and break_end must be set together")
        if self.break_start is not None and self.break_end is not None:
            if self.break_start >= self.break_end:
                raise ValueError("break_start must be before break_end")
            if self.break_start < self.start_time or self.break_end > self.end_time:
                raise ValueError("break must be within working hours")
        return self

    @field_serializer("start_time", "end_time", "break_start", "break_end")
    def serialize_time(self, value: time | None) -> str | None:
        """Serialize times as HH:MM."""
        return value.strftime("%H:%M") if value is not None else None


def default_day_schedule(day: str) -> DaySchedule:
    """Disabled placeholder used for days without a stored entry."""
    if day in ("saturday", "sunday"):
        return DaySchedule(enabled=False, start_time=time(9, 0), end_time=time(13, 0))
    return DaySchedule(enabled=False)


class WeeklyScheduleUpdate(BaseModel):
    """Replacement weekly template keyed by day name; omitted days become disabled."""

    schedule: dict[str, DaySchedule]

    @field_validator("schedule")
    @classmethod
    def validate_day_names(cls, v: dict[str, DaySchedule]) -> dict[str, DaySchedule]:
        """Normalize and validate day names."""
        normalized: dict[str, DaySchedule] = {}
        for day, day_schedule in v.items():
            key = day.strip().lower()
            if key not in DAY_NAMES:
                raise ValueError(f"Unknown day name: {day}")
            normalized[key] = day_schedule
        return normalized


class WeeklyScheduleResponse(BaseModel):
    """Full weekly template of a clinic or branch, always seven days."""

    owner_id: UUID
    schedule: dict[str, DaySchedule]


class ScheduleSummaryResponse(BaseModel):
    """Human-readable summary of a weekly template."""

    owner_id: UUID
    summary: str
