"""Availability endpoints."""

from fastapi import APIRouter, Query, status

from app.dependencies import AvailabilityServiceDep
from app.schemas.availability import AvailabilityResponse

router = APIRouter()


@router.get(
    "",
    response_model=AvailabilityResponse,
    status_code=status.HTTP_200_OK,
    tags=["Availability"],
    summary="Get bookable slots of a provider on a date",
)
async def get_availability(
    service: AvailabilityServiceDep,
    provider_id: str | None = Query(None, alias="providerId"),
    date: str | None = Query(None, description="Civil date, YYYY-MM-DD"),
    branch_id: str | None = Query(None, alias="branchId"),
) -> AvailabilityResponse:
    """
    Compute the bookable 30-minute slots of a provider.

    Missing or malformed providerId/date are rejected with an InvalidRequest
    error before any data is read.

    Args:
        service: Availability service
        provider_id: Provider ID
        date: Target civil date
        branch_id: Optional branch of an independent provider

    Returns:
        The date and its available "HH:MM" slot starts
    """
    return await service.get_availability(provider_id, date, branch_id)
