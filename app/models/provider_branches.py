"""Provider branch model definition using SQLAlchemy Core."""

from sqlalchemy import (
    Boolean,
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

# Practice locations of a self-managed provider; each owns a weekly schedule.
provider_branches = Table(
    "provider_branches",
    metadata,
    Column(
        "id",
        UUID(as_uuid=True),
        primary_key=True,
        server_default=text("gen_random_uuid()"),
    ),
    Column("provider_id", UUID(as_uuid=True), nullable=False, index=True),
    Column("name", String(255)),
    Column("address", Text),
    Column("is_main", Boolean, nullable=False, server_default=text("false")),
    Column("is_active", Boolean, nullable=False, server_default=text("true")),
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
)

Index(
    "idx_provider_branches_provider_main",
    provider_branches.c.provider_id,
    provider_branches.c.is_main,
)
