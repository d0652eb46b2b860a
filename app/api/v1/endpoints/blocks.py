"""Blocked slot and date block request endpoints."""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Query, status

from app.core.exceptions import NotFoundException
from app.dependencies import CacheManagerDep, DatabaseSession
from app.schemas.blocks import (
    BlockedSlotCreate,
    BlockedSlotResponse,
    DateBlockRequestCreate,
    DateBlockRequestResponse,
    DateBlockStatus,
    DateBlockStatusUpdate,
)
from app.services.block_service import BlockService
from app.services.clinic_service import ClinicService
from app.services.schedule_service import ScheduleService

router = APIRouter()


async def _ensure_branch(db: DatabaseSession, branch_id: UUID) -> None:
    if not await ScheduleService(db).get_branch(branch_id):
        raise NotFoundException("Branch not found")


async def _ensure_clinic_doctor(db: DatabaseSession, clinic_id: UUID, doctor_id: UUID) -> None:
    if not await ClinicService().get_clinic_doctor(db, clinic_id, doctor_id):
        raise NotFoundException("Doctor is not associated with this clinic")


@router.get(
    "/branches/{branch_id}/blocked-slots",
    response_model=list[BlockedSlotResponse],
    status_code=status.HTTP_200_OK,
    summary="List blocked slots of a branch",
)
async def list_blocked_slots(
    branch_id: UUID,
    db: DatabaseSession,
    day: date | None = Query(None, alias="date"),
) -> list[BlockedSlotResponse]:
    """List blocked time ranges of a branch, optionally for one date."""
    await _ensure_branch(db, branch_id)
    return await BlockService(db).list_blocked_slots(branch_id, day)


@router.post(
    "/branches/{branch_id}/blocked-slots",
    response_model=BlockedSlotResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Block a time range on a branch",
)
async def create_blocked_slot(
    branch_id: UUID,
    data: BlockedSlotCreate,
    db: DatabaseSession,
) -> BlockedSlotResponse:
    """
    Block a time range on one date of a branch.

    Args:
        branch_id: Branch ID
        data: Date and time range to block
        db: Database session

    Returns:
        Created blocked slot
    """
    await _ensure_branch(db, branch_id)
    return await BlockService(db).create_blocked_slot(branch_id, data)


@router.delete(
    "/branches/{branch_id}/blocked-slots/{slot_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove a blocked slot",
)
async def delete_blocked_slot(
    branch_id: UUID,
    slot_id: UUID,
    db: DatabaseSession,
) -> None:
    """Remove a blocked slot from a branch."""
    await BlockService(db).delete_blocked_slot(branch_id, slot_id)


@router.get(
    "/clinics/{clinic_id}/doctors/{doctor_id}/date-blocks",
    response_model=list[DateBlockRequestResponse],
    status_code=status.HTTP_200_OK,
    summary="List date block requests of a clinic doctor",
)
async def list_date_blocks(
    clinic_id: UUID,
    doctor_id: UUID,
    db: DatabaseSession,
    status_filter: DateBlockStatus | None = Query(None, alias="status"),
    limit: int = Query(50, ge=1, le=200),
) -> list[DateBlockRequestResponse]:
    """List date block requests, newest date first."""
    await _ensure_clinic_doctor(db, clinic_id, doctor_id)
    return await BlockService(db).list_date_blocks(clinic_id, doctor_id, status_filter, limit)


@router.post(
    "/clinics/{clinic_id}/doctors/{doctor_id}/date-blocks",
    response_model=DateBlockRequestResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Request a date block",
)
async def request_date_block(
    clinic_id: UUID,
    doctor_id: UUID,
    data: DateBlockRequestCreate,
    db: DatabaseSession,
) -> DateBlockRequestResponse:
    """
    Ask the clinic to block a date for a doctor.

    Omit both times to request the whole day. The request stays pending and
    has no effect on availability until the clinic approves it.
    """
    await _ensure_clinic_doctor(db, clinic_id, doctor_id)
    return await BlockService(db).request_date_block(clinic_id, doctor_id, data)


@router.patch(
    "/clinics/{clinic_id}/date-blocks/{block_id}/status",
    response_model=DateBlockRequestResponse,
    status_code=status.HTTP_200_OK,
    summary="Approve or reject a date block request",
)
async def review_date_block(
    clinic_id: UUID,
    block_id: UUID,
    data: DateBlockStatusUpdate,
    db: DatabaseSession,
    cache_manager: CacheManagerDep,
) -> DateBlockRequestResponse:
    """
    Approve or reject a pending date block request.

    Raises:
        NotFoundException: If the request does not belong to the clinic
        ConflictException: If the request was already reviewed
    """
    if not await ClinicService(cache_manager).get_clinic_by_id(db, clinic_id):
        raise NotFoundException("Clinic not found")
    return await BlockService(db).review_date_block(clinic_id, block_id, data)
