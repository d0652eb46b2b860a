"""Appointment status values shared by the booking flow and availability."""

from enum import Enum


class AppointmentStatus(str, Enum):
    """Appointment status enumeration."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    REJECTED = "REJECTED"
    DELETED = "DELETED"


# Appointments in these states no longer occupy their slot
TERMINAL_STATUSES = frozenset(
    {
        AppointmentStatus.CANCELLED.value,
        AppointmentStatus.REJECTED.value,
        AppointmentStatus.DELETED.value,
    }
)
