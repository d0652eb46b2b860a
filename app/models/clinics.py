"""Clinic model definition using SQLAlchemy Core."""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Index,
    String,
    Table,
    Text,
    text,
)
from sqlalchemy.dialects.postgresql import UUID

from app.models.base import metadata

clinics = Table(
    "clinics",
    metadata,
    Column(
        "id",
        UUID(as_uuid=True),
        primary_key=True,
        server_default=text("gen_random_uuid()"),
    ),
    Column("user_id", UUID(as_uuid=True), nullable=True, index=True),  # clinic administrator
    Column("name", String(255), nullable=False, index=True),
    Column("address", Text),
    # Status
    Column("status", String(20), nullable=False, server_default=text("'active'"), index=True),
    # active, inactive, temporarily_closed, permanently_closed
    Column("is_active", Boolean, nullable=False, server_default=text("true"), index=True),
    # Metadata
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
    Column("deleted_at", DateTime(timezone=True)),  # Soft delete
    CheckConstraint(
        "status IN ('active', 'inactive', 'temporarily_closed', 'permanently_closed')",
        name="clinics_status_check",
    ),
)

Index("idx_clinics_status", clinics.c.status)
