"""Weekly schedule endpoints for clinics and provider branches."""

from uuid import UUID

from fastapi import APIRouter, status

from app.availability.timezone import civil_date
from app.core.exceptions import NotFoundException
from app.dependencies import CacheManagerDep, ClockDep, DatabaseSession
from app.schemas.schedules import (
    ScheduleSummaryResponse,
    WeeklyScheduleResponse,
    WeeklyScheduleUpdate,
)
from app.services.clinic_service import ClinicService
from app.services.schedule_service import (
    ScheduleOwner,
    ScheduleService,
    summarize_weekly_schedule,
)

router = APIRouter()


async def _ensure_clinic(
    db: DatabaseSession, cache_manager: CacheManagerDep, clinic_id: UUID
) -> None:
    clinic = await ClinicService(cache_manager).get_clinic_by_id(db, clinic_id)
    if not clinic:
        raise NotFoundException("Clinic not found")


async def _ensure_branch(service: ScheduleService, branch_id: UUID) -> None:
    if not await service.get_branch(branch_id):
        raise NotFoundException("Branch not found")


@router.get(
    "/clinics/{clinic_id}/schedule",
    response_model=WeeklyScheduleResponse,
    status_code=status.HTTP_200_OK,
    summary="Get clinic weekly schedule",
)
async def get_clinic_schedule(
    clinic_id: UUID,
    db: DatabaseSession,
    cache_manager: CacheManagerDep,
) -> WeeklyScheduleResponse:
    """
    Get the weekly template shared by all doctors of a clinic.

    Raises:
        NotFoundException: If the clinic does not exist
    """
    await _ensure_clinic(db, cache_manager, clinic_id)
    service = ScheduleService(db, cache_manager)
    return await service.get_weekly_schedule(ScheduleOwner.CLINIC, clinic_id)


@router.put(
    "/clinics/{clinic_id}/schedule",
    response_model=WeeklyScheduleResponse,
    status_code=status.HTTP_200_OK,
    summary="Replace clinic weekly schedule",
)
async def update_clinic_schedule(
    clinic_id: UUID,
    data: WeeklyScheduleUpdate,
    db: DatabaseSession,
    cache_manager: CacheManagerDep,
) -> WeeklyScheduleResponse:
    """Replace the clinic weekly template; omitted days become disabled."""
    await _ensure_clinic(db, cache_manager, clinic_id)
    service = ScheduleService(db, cache_manager)
    return await service.replace_weekly_schedule(ScheduleOwner.CLINIC, clinic_id, data)


@router.get(
    "/clinics/{clinic_id}/schedule/summary",
    response_model=ScheduleSummaryResponse,
    status_code=status.HTTP_200_OK,
    summary="Get clinic schedule summary",
)
async def get_clinic_schedule_summary(
    clinic_id: UUID,
    db: DatabaseSession,
    cache_manager: CacheManagerDep,
    clock: ClockDep,
) -> ScheduleSummaryResponse:
    """Summarize clinic opening hours in one line."""
    await _ensure_clinic(db, cache_manager, clinic_id)
    entries = await ScheduleService(db, cache_manager).list_entries(ScheduleOwner.CLINIC, clinic_id)
    today_index = civil_date(clock.now()).weekday()
    return ScheduleSummaryResponse(
        owner_id=clinic_id,
        summary=summarize_weekly_schedule(entries, today_index),
    )


@router.get(
    "/branches/{branch_id}/schedule",
    response_model=WeeklyScheduleResponse,
    status_code=status.HTTP_200_OK,
    summary="Get branch weekly schedule",
)
async def get_branch_schedule(
    branch_id: UUID,
    db: DatabaseSession,
    cache_manager: CacheManagerDep,
) -> WeeklyScheduleResponse:
    """
    Get the weekly template of an independent provider branch.

    Raises:
        NotFoundException: If the branch does not exist
    """
    service = ScheduleService(db, cache_manager)
    await _ensure_branch(service, branch_id)
    return await service.get_weekly_schedule(ScheduleOwner.BRANCH, branch_id)


@router.put(
    "/branches/{branch_id}/schedule",
    response_model=WeeklyScheduleResponse,
    status_code=status.HTTP_200_OK,
    summary="Replace branch weekly schedule",
)
async def update_branch_schedule(
    branch_id: UUID,
    data: WeeklyScheduleUpdate,
    db: DatabaseSession,
    cache_manager: CacheManagerDep,
) -> WeeklyScheduleResponse:
    """Replace the branch weekly template; omitted days become disabled."""
    service = ScheduleService(db, cache_manager)
    await _ensure_branch(service, branch_id)
    return await service.replace_weekly_schedule(ScheduleOwner.BRANCH, branch_id, data)


@router.get(
    "/branches/{branch_id}/schedule/summary",
    response_model=ScheduleSummaryResponse,
    status_code=status.HTTP_200_OK,
    summary="Get branch schedule summary",
)
async def get_branch_schedule_summary(
    branch_id: UUID,
    db: DatabaseSession,
    cache_manager: CacheManagerDep,
    clock: ClockDep,
) -> ScheduleSummaryResponse:
    """Summarize branch opening hours in one line."""
    service = ScheduleService(db, cache_manager)
    await _ensure_branch(service, branch_id)
    entries = await service.list_entries(ScheduleOwner.BRANCH, branch_id)
    today_index = civil_date(clock.now()).weekday()
    return ScheduleSummaryResponse(
        owner_id=branch_id,
        summary=summarize_weekly_schedule(entries, today_index),
    )
