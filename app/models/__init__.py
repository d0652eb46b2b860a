"""Database models."""

from app.models.appointments import appointments
from app.models.base import metadata
from app.models.blocks import blocked_slots, date_block_requests
from app.models.clinics import clinics
from app.models.doctor_clinics import doctor_clinics
from app.models.provider_branches import provider_branches
from app.models.schedules import clinic_schedules, provider_schedules

__all__ = [
    "appointments",
    "blocked_slots",
    "clinic_schedules",
    "clinics",
    "date_block_requests",
    "doctor_clinics",
    "metadata",
    "provider_branches",
    "provider_schedules",
]
