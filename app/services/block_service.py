"""Block service: branch blocked slots and clinic date block requests."""

from datetime import UTC, date, datetime
from uuid import UUID

import structlog
from sqlalchemy import and_, delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.availability.stores import BlockedRange, DateBlock
from app.core.exceptions import ConflictException, NotFoundException
from app.models.blocks import blocked_slots, date_block_requests
from app.schemas.blocks import (
    BlockedSlotCreate,
    BlockedSlotResponse,
    DateBlockRequestCreate,
    DateBlockRequestResponse,
    DateBlockStatus,
    DateBlockStatusUpdate,
)

logger = structlog.get_logger()


class BlockService:
    """Service for ad hoc unavailability."""

    def __init__(self, db: AsyncSession):
        """Initialize service with database session."""
        self.db = db

    # ------------------------------------------------------------------
    # Reads used by the availability engine
    # ------------------------------------------------------------------

    async def list_blocked_ranges(self, branch_id: UUID, day: date) -> list[BlockedRange]:
        """List blocked time ranges of a branch on a date."""
        stmt = select(blocked_slots.c.start_time, blocked_slots.c.end_time).where(
            and_(
                blocked_slots.c.branch_id == branch_id,
                blocked_slots.c.date == day,
            )
        )
        result = await self.db.execute(stmt)
        return [
            BlockedRange(start_time=row.start_time, end_time=row.end_time)
            for row in result.fetchall()
        ]

    async def list_approved_date_blocks(
        self, clinic_id: UUID, doctor_id: UUID, day: date
    ) -> list[DateBlock]:
        """List approved date blocks of a clinic doctor on a date."""
        stmt = select(date_block_requests.c.start_time, date_block_requests.c.end_time).where(
            and_(
                date_block_requests.c.clinic_id == clinic_id,
                date_block_requests.c.doctor_id == doctor_id,
                date_block_requests.c.date == day,
                date_block_requests.c.status == DateBlockStatus.APPROVED.value,
            )
        )
        result = await self.db.execute(stmt)
        return [
            DateBlock(start_time=row.start_time, end_time=row.end_time)
            for row in result.fetchall()
        ]

    # ------------------------------------------------------------------
    # Blocked slots (independent providers)
    # ------------------------------------------------------------------

    async def list_blocked_slots(
        self, branch_id: UUID, day: date | None = None
    ) -> list[BlockedSlotResponse]:
        """
        List blocked slots of a branch.

        Args:
            branch_id: Branch ID
            day: Optional date filter

        Returns:
            Blocked slots ordered by date and start time
        """
        conditions = [blocked_slots.c.branch_id == branch_id]
        if day is not None:
            conditions.append(blocked_slots.c.date == day)

        stmt = (
            select(blocked_slots)
            .where(and_(*conditions))
            .order_by(blocked_slots.c.date, blocked_slots.c.start_time)
        )
        result = await self.db.execute(stmt)
        return [BlockedSlotResponse.model_validate(dict(row._mapping)) for row in result.fetchall()]

    async def create_blocked_slot(
        self, branch_id: UUID, data: BlockedSlotCreate
    ) -> BlockedSlotResponse:
        """Block a time range on a branch."""
        stmt = (
            insert(blocked_slots)
            .values(
                branch_id=branch_id,
                date=data.date,
                start_time=data.start_time,
                end_time=data.end_time,
                reason=data.reason,
            )
            .returning(blocked_slots)
        )
        result = await self.db.execute(stmt)
        row = result.fetchone()
        await self.db.commit()

        logger.info(
            "blocked_slot_created",
            branch_id=str(branch_id),
            date=data.date.isoformat(),
        )
        return BlockedSlotResponse.model_validate(dict(row._mapping))

    async def delete_blocked_slot(self, branch_id: UUID, slot_id: UUID) -> None:
        """
        Remove a blocked slot.

        Raises:
            NotFoundException: If the slot does not exist on this branch
        """
        stmt = (
            delete(blocked_slots)
            .where(
                and_(
                    blocked_slots.c.id == slot_id,
                    blocked_slots.c.branch_id == branch_id,
                )
            )
            .returning(blocked_slots.c.id)
        )
        result = await self.db.execute(stmt)
        deleted = result.scalar_one_or_none()
        if deleted is None:
            await self.db.rollback()
            raise NotFoundException("Blocked slot not found")
        await self.db.commit()

    # ------------------------------------------------------------------
    # Date block requests (clinic doctors)
    # ------------------------------------------------------------------

    async def request_date_block(
        self,
        clinic_id: UUID,
        doctor_id: UUID,
        data: DateBlockRequestCreate,
    ) -> DateBlockRequestResponse:
        """Create a pending date block request for a clinic doctor."""
        stmt = (
            insert(date_block_requests)
            .values(
                clinic_id=clinic_id,
                doctor_id=doctor_id,
                date=data.date,
                start_time=data.start_time,
                end_time=data.end_time,
                reason=data.reason,
                status=DateBlockStatus.PENDING.value,
            )
            .returning(date_block_requests)
        )
        result = await self.db.execute(stmt)
        row = result.fetchone()
        await self.db.commit()

        logger.info(
            "date_block_requested",
            clinic_id=str(clinic_id),
            doctor_id=str(doctor_id),
            date=data.date.isoformat(),
            full_day=data.start_time is None,
        )
        return DateBlockRequestResponse.model_validate(dict(row._mapping))

    async def list_date_blocks(
        self,
        clinic_id: UUID,
        doctor_id: UUID,
        status: DateBlockStatus | None = None,
        limit: int = 50,
    ) -> list[DateBlockRequestResponse]:
        """List a doctor's date block requests, newest date first."""
        conditions = [
            date_block_requests.c.clinic_id == clinic_id,
            date_block_requests.c.doctor_id == doctor_id,
        ]
        if status:
            conditions.append(date_block_requests.c.status == status.value)

        stmt = (
            select(date_block_requests)
            .where(and_(*conditions))
            .order_by(date_block_requests.c.date.desc())
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return [
            DateBlockRequestResponse.model_validate(dict(row._mapping))
            for row in result.fetchall()
        ]

    async def review_date_block(
        self,
        clinic_id: UUID,
        block_id: UUID,
        data: DateBlockStatusUpdate,
    ) -> DateBlockRequestResponse:
        """
        Approve or reject a pending date block request.

        Raises:
            NotFoundException: If the request does not belong to the clinic
            ConflictException: If the request was already reviewed
        """
        stmt = select(date_block_requests).where(
            and_(
                date_block_requests.c.id == block_id,
                date_block_requests.c.clinic_id == clinic_id,
            )
        )
        result = await self.db.execute(stmt)
        current = result.fetchone()
        if not current:
            raise NotFoundException("Date block request not found")
        if current.status != DateBlockStatus.PENDING.value:
            raise ConflictException(f"Date block request already {current.status}")

        now = datetime.now(UTC)
        update_stmt = (
            update(date_block_requests)
            .where(
                and_(
                    date_block_requests.c.id == block_id,
                    date_block_requests.c.status == DateBlockStatus.PENDING.value,
                )
            )
            .values(status=data.status.value, reviewed_at=now, updated_at=now)
            .returning(date_block_requests)
        )
        result = await self.db.execute(update_stmt)
        row = result.fetchone()
        if row is None:
            # Reviewed by a concurrent request after the read above
            await self.db.rollback()
            raise ConflictException("Date block request already reviewed")
        await self.db.commit()

        logger.info(
            "date_block_reviewed",
            clinic_id=str(clinic_id),
            block_id=str(block_id),
            status=data.status.value,
        )
        return DateBlockRequestResponse.model_validate(dict(row._mapping))
