"""Blocked slot and date block request schemas."""

from datetime import date, datetime, time
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field, model_validator


class DateBlockStatus(str, Enum):
    """Date block request status enumeration."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class BlockedSlotCreate(BaseModel):
    """Schema for blocking a time range on a branch."""

    date: date
    start_time: time
    end_time: time
    reason: str | None = Field(None, max_length=500)

    @model_validator(mode="after")
    def validate_range(self) -> "BlockedSlotCreate":
        """Validate start time is before end time."""
        if self.start_time >= self.end_time:
            raise ValueError("start_time must be before end_time")
        return self


class BlockedSlotResponse(BaseModel):
    """Schema for blocked slot response."""

    id: UUID
    branch_id: UUID
    date: date
    start_time: time
    end_time: time
    reason: str | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class DateBlockRequestCreate(BaseModel):
    """
    Schema for a clinic doctor asking to block a date.

    Leave both times empty to request the whole day.
    """

    date: date
    start_time: time | None = None
    end_time: time | None = None
    reason: str | None = Field(None, max_length=500)

    @model_validator(mode="after")
    def validate_range(self) -> "DateBlockRequestCreate":
        """Validate that times come in pairs and are ordered."""
        if (self.start_time is None) != (self.end_time is None):
            raise ValueError("start_time and end_time must be provided together")
        if self.start_time is not None and self.end_time is not None:
            if self.start_time >= self.end_time:
                raise ValueError("start_time must be before end_time")
        return self


class DateBlockStatusUpdate(BaseModel):
    """Schema for a clinic reviewing a date block request."""

    status: DateBlockStatus

    @model_validator(mode="after")
    def validate_final_status(self) -> "DateBlockStatusUpdate":
        """Only approved or rejected are valid review outcomes."""
        if self.status == DateBlockStatus.PENDING:
            raise ValueError("status must be approved or rejected")
        return self


class DateBlockRequestResponse(BaseModel):
    """Schema for date block request response."""

    id: UUID
    clinic_id: UUID
    doctor_id: UUID
    date: date
    start_time: time | None = None
    end_time: time | None = None
    reason: str | None = None
    status: DateBlockStatus
    reviewed_at: datetime | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
