"""Availability query response schema."""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field


class AvailabilityResponse(BaseModel):
    """Bookable slot starts of one provider on one civil date."""

    model_config = ConfigDict(populate_by_name=True)

    date: dt.date
    available_slots: list[str] = Field(
        default_factory=list,
        alias="availableSlots",
        description='Civil "HH:MM" slot starts in ascending order; empty means no openings',
    )
