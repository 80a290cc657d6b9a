"""Appointment status display styles"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class AppointmentStatus(str, Enum):
    SCHEDULED = "scheduled"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


DEFAULT_STATUS = AppointmentStatus.SCHEDULED


class StatusStyle(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    backgroundColor: str
    borderColor: str
    textColor: str


# Order here is the legend order
STATUS_STYLES: dict[AppointmentStatus, StatusStyle] = {
    AppointmentStatus.SCHEDULED: StatusStyle(
        label="Scheduled", backgroundColor="#f3f4f6", borderColor="#9ca3af", textColor="#374151"
    ),
    AppointmentStatus.CONFIRMED: StatusStyle(
        label="Confirmed", backgroundColor="#dcfce7", borderColor="#16a34a", textColor="#166534"
    ),
    AppointmentStatus.IN_PROGRESS: StatusStyle(
        label="In progress", backgroundColor="#e0e7ff", borderColor="#6366f1", textColor="#4338ca"
    ),
    AppointmentStatus.COMPLETED: StatusStyle(
        label="Completed", backgroundColor="#dbeafe", borderColor="#3b82f6", textColor="#1e40af"
    ),
    AppointmentStatus.CANCELLED: StatusStyle(
        label="Cancelled", backgroundColor="#fee2e2", borderColor="#dc2626", textColor="#991b1b"
    ),
    AppointmentStatus.NO_SHOW: StatusStyle(
        label="No show", backgroundColor="#fed7aa", borderColor="#ea580c", textColor="#9a3412"
    ),
}


def normalize_status(status: Optional[str]) -> AppointmentStatus:
    """Map a raw status value to a known status; anything unknown is 'scheduled'"""
    if not status:
        return DEFAULT_STATUS
    try:
        return AppointmentStatus(str(status).strip().lower())
    except ValueError:
        return DEFAULT_STATUS


def get_status_style(status: Optional[str]) -> StatusStyle:
    return STATUS_STYLES[normalize_status(status)]
