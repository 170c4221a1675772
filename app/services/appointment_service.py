"""
Appointment Service
Lifecycle updates and prescriptions for existing appointments
"""
import logging
from typing import Any, Dict, List, Optional

from app.errors import InvalidTransitionError, NotFoundError, PermissionDeniedError, ValidationError
from app.extensions import db
from app.models import Appointment, Prescription, User
from app.models.appointment import STATUSES
from app.repositories import AppointmentRepository
from app.utils.validators import optional_string, validate_choice, validate_time

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ('notes', 'location')


def get_appointment_for_user(
    appointment_id: str,
    user: User,
    appointments: Optional[AppointmentRepository] = None,
) -> Appointment:
    """Fetch an appointment the user takes part in, as patient or provider."""
    appointments = appointments or AppointmentRepository()
    appointment = appointments.find_by_id(appointment_id)
    if not appointment:
        raise NotFoundError('Appointment not found')
    if not appointment.involves(user.id):
        raise PermissionDeniedError('You are not part of this appointment')
    return appointment


def list_appointments_for_user(user: User, status: Optional[str] = None) -> List[Appointment]:
    if status:
        validate_choice(status, STATUSES, 'status')
    return AppointmentRepository().list_for_user(user.id, status)


def update_appointment(appointment_id: str, user: User, data: Dict[str, Any]) -> Appointment:
    """
    Update notes/location and move the status forward.

    Status moves follow upcoming -> ongoing -> completed, or
    upcoming -> cancelled; completed and cancelled are final.
    """
    appointments = AppointmentRepository()
    appointment = get_appointment_for_user(appointment_id, user, appointments)

    if 'date' in data or 'time' in data:
        raise ValidationError('Appointments cannot be rescheduled; cancel and book a new slot')

    for field in UPDATABLE_FIELDS:
        if field in data:
            setattr(appointment, field, optional_string(data[field], field))

    new_status = data.get('status')
    if new_status and new_status != appointment.status:
        validate_choice(new_status, STATUSES, 'status')
        if not appointment.can_transition_to(new_status):
            raise InvalidTransitionError(
                f'Cannot change appointment status from {appointment.status} to {new_status}'
            )
        logger.info(
            "Appointment %s status %s -> %s by %s",
            appointment.id, appointment.status, new_status, user.id,
        )
        appointment.status = new_status

    return appointments.save(appointment)


def _normalize_prescription(data: Dict[str, Any]) -> Dict[str, Any]:
    medicine = (optional_string(data.get('medicine'), 'medicine') or '').strip()
    dosage = (optional_string(data.get('dosage'), 'dosage') or '').strip()
    duration = str(data.get('duration') or '').strip()
    times = data.get('times') or []

    if not medicine:
        raise ValidationError('medicine is required')
    if not dosage:
        raise ValidationError('dosage is required')
    if not duration:
        raise ValidationError('duration is required')
    if not isinstance(times, list) or not times:
        raise ValidationError('times must be a non-empty list of HH:MM values')
    for t in times:
        validate_time(t, 'times')

    return {
        'medicine': medicine,
        'dosage': dosage,
        'times': list(times),
        'duration': duration,
        'notes': optional_string(data.get('notes'), 'notes') or '',
    }


def add_prescription(appointment_id: str, user: User, data: Dict[str, Any]) -> Prescription:
    """Append a prescription; only the appointment's provider may prescribe."""
    appointment = get_appointment_for_user(appointment_id, user)
    if appointment.provider_id != user.id:
        raise PermissionDeniedError('Only the appointment provider can add prescriptions')
    if appointment.status == 'cancelled':
        raise ValidationError('Cannot add a prescription to a cancelled appointment')

    fields = _normalize_prescription(data)
    prescription = Prescription(
        appointment_id=appointment.id,
        position=len(appointment.prescriptions),
        **fields,
    )
    db.session.add(prescription)
    db.session.commit()

    logger.info("Prescription %s added to appointment %s", prescription.id, appointment.id)
    return prescription


def list_prescriptions(appointment_id: str, user: User) -> List[Prescription]:
    appointment = get_appointment_for_user(appointment_id, user)
    return list(appointment.prescriptions)
