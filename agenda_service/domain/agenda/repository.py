"""Agenda repository - Database queries for the daily agenda job"""

from datetime import date

from sqlalchemy.orm import Session, joinedload

from ...models import AgendaNotificationConfig, Appointment
from .styles import AppointmentStatus


class AgendaRepository:
    """Repository for agenda database operations"""

    @staticmethod
    def get_enabled_configs(db: Session) -> list[AgendaNotificationConfig]:
        """All enabled notification configs with their organization loaded"""
        return (
            db.query(AgendaNotificationConfig)
            .options(joinedload(AgendaNotificationConfig.organization))
            .filter(AgendaNotificationConfig.is_enabled.is_(True))
            .order_by(AgendaNotificationConfig.id.asc())
            .all()
        )

    @staticmethod
    def get_appointments_for_day(
        db: Session, organization_id: int, day: date
    ) -> list[Appointment]:
        """A day's non-cancelled appointments, earliest first"""
        return (
            db.query(Appointment)
            .options(
                joinedload(Appointment.contact),
                joinedload(Appointment.service),
                joinedload(Appointment.member),
            )
            .filter(
                Appointment.organization_id == organization_id,
                Appointment.appointment_date == day,
                Appointment.status != AppointmentStatus.CANCELLED.value,
            )
            .order_by(Appointment.start_time.asc(), Appointment.id.asc())
            .all()
        )
