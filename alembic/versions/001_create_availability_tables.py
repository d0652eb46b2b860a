"""Create weekly schedules, branches, blocked slots and date block requests

Revision ID: 001_create_availability_tables
Revises: None
Create Date: 2026-10-19

"""

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def _id_column() -> sa.Column:
    return sa.Column(
        "id",
        postgresql.UUID(as_uuid=True),
        server_default=sa.text("gen_random_uuid()"),
        nullable=False,
    )


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
    ]


def _schedule_columns() -> list[sa.Column]:
    return [
        _id_column(),
        sa.Column("day_of_week", sa.SmallInteger(), nullable=False),
        sa.Column("enabled", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=True),
        sa.Column("end_time", sa.Time(), nullable=True),
        sa.Column("break_start", sa.Time(), nullable=True),
        sa.Column("break_end", sa.Time(), nullable=True),
        *_timestamps(),
    ]


def upgrade() -> None:
    """Create availability tables."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "pgcrypto"')

    op.create_table(
        "clinics",
        _id_column(),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=20), server_default=sa.text("'active'"), nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        *_timestamps(),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "status IN ('active', 'inactive', 'temporarily_closed', 'permanently_closed')",
            name="clinics_status_check",
        ),
    )
    op.create_index("idx_clinics_status", "clinics", ["status"])

    op.create_table(
        "doctor_clinics",
        _id_column(),
        sa.Column("provider_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("clinic_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("department", sa.String(length=200), nullable=True),
        sa.Column(
            "start_date",
            sa.DateTime(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("status", sa.String(length=20), server_default=sa.text("'active'"), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["clinic_id"], ["clinics.id"], ondelete="CASCADE"),
        sa.CheckConstraint(
            "status IN ('active', 'on_leave', 'temporarily_unavailable', 'inactive')",
            name="doctor_clinics_status_check",
        ),
    )
    op.create_index(
        "idx_doctor_clinics_provider_status", "doctor_clinics", ["provider_id", "status"]
    )
    op.create_index(
        "idx_doctor_clinics_active",
        "doctor_clinics",
        ["provider_id", "clinic_id"],
        postgresql_where=sa.text("end_date IS NULL AND status = 'active'"),
    )

    op.create_table(
        "provider_branches",
        _id_column(),
        sa.Column("provider_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("is_main", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_provider_branches_provider_main", "provider_branches", ["provider_id", "is_main"]
    )

    op.create_table(
        "clinic_schedules",
        sa.Column("clinic_id", postgresql.UUID(as_uuid=True), nullable=False),
        *_schedule_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["clinic_id"], ["clinics.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("clinic_id", "day_of_week", name="unique_day_per_clinic"),
        sa.CheckConstraint("day_of_week BETWEEN 0 AND 6", name="clinic_schedules_day_check"),
    )

    op.create_table(
        "provider_schedules",
        sa.Column("branch_id", postgresql.UUID(as_uuid=True), nullable=False),
        *_schedule_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["branch_id"], ["provider_branches.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("branch_id", "day_of_week", name="unique_day_per_branch"),
        sa.CheckConstraint("day_of_week BETWEEN 0 AND 6", name="provider_schedules_day_check"),
    )

    op.create_table(
        "appointments",
        _id_column(),
        sa.Column("patient_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("provider_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("branch_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("clinic_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("scheduled_for", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("reason", sa.Text(), nullable=True),
        sa.Column("status", sa.Text(), server_default="CONFIRMED", nullable=False),
        *_timestamps(),
        sa.Column("cancelled_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "status IN ('PENDING', 'CONFIRMED', 'COMPLETED', 'CANCELLED', 'REJECTED', 'DELETED')",
            name="appointments_status_check",
        ),
    )
    op.create_index(
        "idx_appointments_provider_scheduled", "appointments", ["provider_id", "scheduled_for"]
    )

    op.create_table(
        "blocked_slots",
        _id_column(),
        sa.Column("branch_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=False),
        sa.Column("end_time", sa.Time(), nullable=False),
        sa.Column("reason", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["branch_id"], ["provider_branches.id"], ondelete="CASCADE"),
        sa.CheckConstraint("start_time < end_time", name="blocked_slots_range_check"),
    )
    op.create_index("idx_blocked_slots_branch_date", "blocked_slots", ["branch_id", "date"])

    op.create_table(
        "date_block_requests",
        _id_column(),
        sa.Column("clinic_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("doctor_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=True),
        sa.Column("end_time", sa.Time(), nullable=True),
        sa.Column("reason", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=20), server_default=sa.text("'pending'"), nullable=False),
        sa.Column("reviewed_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["clinic_id"], ["clinics.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["doctor_id"], ["doctor_clinics.id"], ondelete="CASCADE"),
        sa.CheckConstraint(
            "status IN ('pending', 'approved', 'rejected')",
            name="date_block_requests_status_check",
        ),
        sa.CheckConstraint(
            "(start_time IS NULL AND end_time IS NULL) "
            "OR (start_time IS NOT NULL AND end_time IS NOT NULL AND start_time < end_time)",
            name="date_block_requests_range_check",
        ),
    )
    op.create_index(
        "idx_date_block_requests_lookup",
        "date_block_requests",
        ["clinic_id", "doctor_id", "date"],
    )


def downgrade() -> None:
    """Drop availability tables."""
    op.drop_table("date_block_requests")
    op.drop_table("blocked_slots")
    op.drop_table("appointments")
    op.drop_table("provider_schedules")
    op.drop_table("clinic_schedules")
    op.drop_table("provider_branches")
    op.drop_table("doctor_clinics")
    op.drop_table("clinics")
