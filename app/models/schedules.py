"""Weekly schedule templates for clinics and provider branches."""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    SmallInteger,
    Table,
    Time,
    UniqueConstraint,
    text,
)
from sqlalchemy.dialects.postgresql import UUID

from app.models.base import metadata


def _schedule_columns() -> list:
    """Columns shared by both schedule owners. day_of_week: 0=Monday, 6=Sunday."""
    return [
        Column(
            "id",
            UUID(as_uuid=True),
            primary_key=True,
            server_default=text("gen_random_uuid()"),
        ),
        Column("day_of_week", SmallInteger, nullable=False),
        Column("enabled", Boolean, nullable=False, server_default=text("true")),
        Column("start_time", Time, nullable=True),
        Column("end_time", Time, nullable=True),
        Column("break_start", Time, nullable=True),
        Column("break_end", Time, nullable=True),
        Column("created_at", DateTime(timezone=True), nullable=False, server_default=text("NOW()")),
        Column("updated_at", DateTime(timezone=True), nullable=False, server_default=text("NOW()")),
    ]


# Shared by every doctor affiliated with the clinic
clinic_schedules = Table(
    "clinic_schedules",
    metadata,
    Column(
        "clinic_id",
        UUID(as_uuid=True),
        ForeignKey("clinics.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    *_schedule_columns(),
    UniqueConstraint("clinic_id", "day_of_week", name="unique_day_per_clinic"),
    CheckConstraint("day_of_week BETWEEN 0 AND 6", name="clinic_schedules_day_check"),
)

provider_schedules = Table(
    "provider_schedules",
    metadata,
    Column(
        "branch_id",
        UUID(as_uuid=True),
        ForeignKey("provider_branches.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    *_schedule_columns(),
    UniqueConstraint("branch_id", "day_of_week", name="unique_day_per_branch"),
    CheckConstraint("day_of_week BETWEEN 0 AND 6", name="provider_schedules_day_check"),
)
