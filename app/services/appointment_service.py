"""Appointment reads needed by the availability engine."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.availability.stores import AppointmentRecord
from app.models.appointments import appointments


class AppointmentService:
    """Service for reading booked appointments."""

    def __init__(self, db: AsyncSession):
        """Initialize service with database session."""
        self.db = db

    async def list_appointments(
        self,
        provider_id: UUID,
        from_instant: datetime,
        to_instant: datetime,
    ) -> list[AppointmentRecord]:
        """
        List a provider's appointments starting inside a time range.

        Statuses are returned as stored; callers decide which ones occupy a slot.

        Args:
            provider_id: Provider ID
            from_instant: Inclusive lower bound on scheduled_for
            to_instant: Inclusive upper bound on scheduled_for

        Returns:
            Appointment start instants and statuses, ascending
        """
        stmt = (
            select(appointments.c.scheduled_for, appointments.c.status)
            .where(
                and_(
                    appointments.c.provider_id == provider_id,
                    appointments.c.scheduled_for >= from_instant,
                    appointments.c.scheduled_for <= to_instant,
                )
            )
            .order_by(appointments.c.scheduled_for)
        )

        result = await self.db.execute(stmt)
        return [
            AppointmentRecord(scheduled_for=row.scheduled_for, status=row.status)
            for row in result.fetchall()
        ]
