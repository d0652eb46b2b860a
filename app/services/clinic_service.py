"""Clinic service for clinic lookups and doctor affiliations."""

from uuid import UUID

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.availability.stores import Affiliation
from app.core.redis_client import CacheManager
from app.models.clinics import clinics
from app.models.doctor_clinics import doctor_clinics


class ClinicService:
    """Service for clinic operations."""

    # Cache TTL in seconds
    CLINIC_CACHE_TTL = 900  # 15 minutes for individual clinics

    def __init__(self, cache_manager: CacheManager | None = None):
        """Initialize service with optional cache manager."""
        self.cache = cache_manager

    @staticmethod
    def _get_clinic_cache_key(clinic_id: UUID) -> str:
        """Generate cache key for clinic."""
        return f"clinic:{clinic_id}"

    async def get_clinic_by_id(self, db: AsyncSession, clinic_id: UUID) -> dict | None:
        """Get clinic by ID with caching."""
        # Try cache first
        if self.cache:
            cache_key = self._get_clinic_cache_key(clinic_id)
            cached = self.cache.get_json(cache_key)
            if cached:
                return cached

        query = select(clinics).where(clinics.c.id == clinic_id, clinics.c.deleted_at.is_(None))

        result = await db.execute(query)
        clinic = result.mappings().first()

        if not clinic:
            return None

        clinic_dict = dict(clinic)

        # Cache result
        if self.cache:
            cache_key = self._get_clinic_cache_key(clinic_id)
            self.cache.set_json(cache_key, clinic_dict, ttl=self.CLINIC_CACHE_TTL)

        return clinic_dict

    async def get_active_clinic_affiliation(
        self, db: AsyncSession, provider_id: UUID
    ) -> Affiliation | None:
        """
        Get the clinic currently governing a provider's schedule.

        Args:
            db: Database session
            provider_id: Provider ID

        Returns:
            Clinic and doctor record IDs, or None for independent providers
        """
        query = (
            select(doctor_clinics.c.id, doctor_clinics.c.clinic_id)
            .where(
                and_(
                    doctor_clinics.c.provider_id == provider_id,
                    doctor_clinics.c.status == "active",
                    doctor_clinics.c.end_date.is_(None),
                )
            )
            .order_by(doctor_clinics.c.start_date.desc())
            .limit(1)
        )
        result = await db.execute(query)
        row = result.first()
        if not row:
            return None
        return Affiliation(clinic_id=row.clinic_id, doctor_id=row.id)

    async def get_clinic_doctor(
        self, db: AsyncSession, clinic_id: UUID, doctor_id: UUID
    ) -> dict | None:
        """Get a doctor record of a clinic."""
        query = select(doctor_clinics).where(
            and_(
                doctor_clinics.c.id == doctor_id,
                doctor_clinics.c.clinic_id == clinic_id,
            )
        )
        result = await db.execute(query)
        doctor = result.mappings().first()
        return dict(doctor) if doctor else None
