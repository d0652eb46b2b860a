"""Clinic affiliation of a provider (the clinic doctor record)."""

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    String,
    Table,
    text,
)
from sqlalchemy.dialects.postgresql import UUID

from app.models.base import metadata

# A provider with an active row here is governed by the clinic's weekly
# schedule. The row id is the "doctor id" referenced by date block requests.
doctor_clinics = Table(
    "doctor_clinics",
    metadata,
    Column(
        "id",
        UUID(as_uuid=True),
        primary_key=True,
        server_default=text("gen_random_uuid()"),
    ),
    Column("provider_id", UUID(as_uuid=True), nullable=False, index=True),
    Column(
        "clinic_id",
        UUID(as_uuid=True),
        ForeignKey("clinics.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column("user_id", UUID(as_uuid=True), nullable=True),
    Column("department", String(200)),
    Column("start_date", DateTime(timezone=True), nullable=False, server_default=text("NOW()")),
    Column("end_date", DateTime(timezone=True)),  # NULL = currently active
    # active, on_leave, temporarily_unavailable, inactive
    Column("status", String(20), nullable=False, server_default=text("'active'"), index=True),
    Column(
        "created_at",
        DateTime(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    ),
    Column(
        "updated_at",
        DateTime(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    ),
    CheckConstraint(
        "status IN ('active', 'on_leave', 'temporarily_unavailable', 'inactive')",
        name="doctor_clinics_status_check",
    ),
)

Index("idx_doctor_clinics_provider_status", doctor_clinics.c.provider_id, doctor_clinics.c.status)
Index(
    "idx_doctor_clinics_active",
    doctor_clinics.c.provider_id,
    doctor_clinics.c.clinic_id,
    postgresql_where=text("end_date IS NULL AND status = 'active'"),
)
