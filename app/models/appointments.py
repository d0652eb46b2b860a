"""Appointments table model using SQLAlchemy Core."""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Index,
    Table,
    Text,
    text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

from app.models.base import metadata

# Written by the booking flow; the availability engine only reads it.
appointments = Table(
    "appointments",
    metadata,
    Column(
        "id",
        UUID(as_uuid=True),
        primary_key=True,
        server_default=text("gen_random_uuid()"),
    ),
    # Ownership / references
    Column("patient_id", UUID(as_uuid=True), nullable=True),
    Column("provider_id", UUID(as_uuid=True), nullable=False),
    Column("branch_id", UUID(as_uuid=True), nullable=True),
    Column("clinic_id", UUID(as_uuid=True), nullable=True),
    # Appointment details
    Column("scheduled_for", TIMESTAMP(timezone=True), nullable=False),
    Column("reason", Text, nullable=True),
    Column("status", Text, nullable=False, server_default="CONFIRMED"),
    # Audit fields
    Column("created_at", TIMESTAMP(timezone=True), nullable=False, server_default=text("NOW()")),
    Column("updated_at", TIMESTAMP(timezone=True), nullable=False, server_default=text("NOW()")),
    Column("cancelled_at", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint(
        "status IN ('PENDING', 'CONFIRMED', 'COMPLETED', 'CANCELLED', 'REJECTED', 'DELETED')",
        name="appointments_status_check",
    ),
)

Index(
    "idx_appointments_provider_scheduled",
    appointments.c.provider_id,
    appointments.c.scheduled_for,
)
