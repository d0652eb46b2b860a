"""Ad hoc unavailability: branch blocked slots and clinic date block requests."""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    String,
    Table,
    Text,
    Time,
    text,
)
from sqlalchemy.dialects.postgresql import UUID

from app.models.base import metadata

# Independent providers block time ranges on a branch directly
blocked_slots = Table(
    "blocked_slots",
    metadata,
    Column(
        "id",
        UUID(as_uuid=True),
        primary_key=True,
        server_default=text("gen_random_uuid()"),
    ),
    Column(
        "branch_id",
        UUID(as_uuid=True),
        ForeignKey("provider_branches.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("date", Date, nullable=False),
    Column("start_time", Time, nullable=False),
    Column("end_time", Time, nullable=False),
    Column("reason", Text),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=text("NOW()")),
    CheckConstraint("start_time < end_time", name="blocked_slots_range_check"),
)

Index("idx_blocked_slots_branch_date", blocked_slots.c.branch_id, blocked_slots.c.date)

# Clinic doctors ask their clinic to block a date; only approved rows count.
# Null start_time and end_time means the whole day.
date_block_requests = Table(
    "date_block_requests",
    metadata,
    Column(
        "id",
        UUID(as_uuid=True),
        primary_key=True,
        server_default=text("gen_random_uuid()"),
    ),
    Column(
        "clinic_id",
        UUID(as_uuid=True),
        ForeignKey("clinics.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "doctor_id",
        UUID(as_uuid=True),
        ForeignKey("doctor_clinics.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("date", Date, nullable=False),
    Column("start_time", Time, nullable=True),
    Column("end_time", Time, nullable=True),
    Column("reason", Text),
    Column("status", String(20), nullable=False, server_default=text("'pending'")),
    Column("reviewed_at", DateTime(timezone=True)),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=text("NOW()")),
    Column("updated_at", DateTime(timezone=True), nullable=False, server_default=text("NOW()")),
    CheckConstraint(
        "status IN ('pending', 'approved', 'rejected')",
        name="date_block_requests_status_check",
    ),
    CheckConstraint(
        "(start_time IS NULL AND end_time IS NULL) "
        "OR (start_time IS NOT NULL AND end_time IS NOT NULL AND start_time < end_time)",
        name="date_block_requests_range_check",
    ),
)

Index(
    "idx_date_block_requests_lookup",
    date_block_requests.c.clinic_id,
    date_block_requests.c.doctor_id,
    date_block_requests.c.date,
)
