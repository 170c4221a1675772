"""
Appointment persistence backed by SQLAlchemy.

``insert`` relies on the ``uq_appointments_live_slot`` partial unique index:
when two writers race for the same live slot the loser's commit fails and
surfaces as ``SlotTakenError``.
"""
import logging
from datetime import date
from typing import Iterable, List, Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError

from app.errors import SlotTakenError
from app.extensions import db
from app.models import Appointment
from app.models.appointment import LIVE_STATUSES

logger = logging.getLogger(__name__)

LIVE_SLOT_INDEX = 'uq_appointments_live_slot'
# SQLite names the columns instead of the index
_SQLITE_LIVE_SLOT_MESSAGE = 'appointments.provider_id, appointments.date, appointments.time'


def _is_live_slot_violation(error: IntegrityError) -> bool:
    message = str(error.orig)
    return LIVE_SLOT_INDEX in message or _SQLITE_LIVE_SLOT_MESSAGE in message


class AppointmentRepository:

    def find_by_id(self, appointment_id: str) -> Optional[Appointment]:
        if not appointment_id:
            return None
        return db.session.get(Appointment, appointment_id)

    def find_by_provider_date_time(
        self,
        provider_id: str,
        appointment_date: date,
        time: str,
        statuses: Iterable[str] = LIVE_STATUSES,
    ) -> Optional[Appointment]:
        return Appointment.query.filter(
            Appointment.provider_id == provider_id,
            Appointment.date == appointment_date,
            Appointment.time == time,
            Appointment.status.in_(tuple(statuses)),
        ).first()

    def find_live_for_provider(self, provider_id: str, start: date, end: date) -> List[Appointment]:
        """Live appointments for a provider with ``start <= date <= end``."""
        return Appointment.query.filter(
            Appointment.provider_id == provider_id,
            Appointment.date >= start,
            Appointment.date <= end,
            Appointment.status.in_(LIVE_STATUSES),
        ).all()

    def list_for_user(self, user_id: str, status: Optional[str] = None) -> List[Appointment]:
        query = Appointment.query.filter(
            or_(Appointment.patient_id == user_id, Appointment.provider_id == user_id)
        )
        if status:
            query = query.filter(Appointment.status == status)
        return query.order_by(Appointment.date.desc(), Appointment.time.asc()).all()

    def insert(self, appointment: Appointment) -> Appointment:
        db.session.add(appointment)
        try:
            db.session.commit()
        except IntegrityError as e:
            db.session.rollback()
            if not _is_live_slot_violation(e):
                raise
            logger.info(
                "Concurrent booking lost for provider %s on %s %s",
                appointment.provider_id, appointment.date, appointment.time,
            )
            raise SlotTakenError()
        return appointment

    def save(self, appointment: Appointment) -> Appointment:
        db.session.commit()
        return appointment
