"""
Medication Service
Records whether scheduled prescription doses were taken
"""
import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError

from app.errors import NotFoundError, PermissionDeniedError, ValidationError
from app.extensions import db
from app.models import Appointment, MedicationIntake, Prescription, User
from app.utils.validators import optional_string, parse_date, require_fields, validate_time

logger = logging.getLogger(__name__)


def _find_intake(prescription_id, intake_date, time) -> Optional[MedicationIntake]:
    return MedicationIntake.query.filter_by(
        prescription_id=prescription_id,
        date=intake_date,
        time=time,
    ).first()


def record_intake(user: User, data: Dict[str, Any]) -> Tuple[MedicationIntake, bool]:
    """
    Upsert the intake for (prescription_id, date, time).

    A second write for the same dose overwrites ``taken`` on the existing
    row. Returns ``(intake, created)``.
    """
    require_fields(data, 'prescription_id', 'date', 'time')
    if 'taken' not in data or not isinstance(data['taken'], bool):
        raise ValidationError('Field "taken" must be true or false')

    intake_date = parse_date(data['date'])
    time = validate_time(data['time'])
    taken = data['taken']

    prescription = db.session.get(Prescription, data['prescription_id'])
    if not prescription:
        raise NotFoundError('Prescription not found')
    appointment = prescription.appointment
    if appointment.patient_id != user.id:
        raise PermissionDeniedError('Only the prescribed patient can record intakes')

    existing = _find_intake(prescription.id, intake_date, time)
    if existing:
        existing.taken = taken
        db.session.commit()
        return existing, False

    intake = MedicationIntake(
        prescription_id=prescription.id,
        patient_id=appointment.patient_id,
        medicine=optional_string(data.get('medicine'), 'medicine') or prescription.medicine,
        date=intake_date,
        time=time,
        taken=taken,
    )
    db.session.add(intake)
    try:
        db.session.commit()
    except IntegrityError:
        # Another request created the same dose first; update that row instead
        db.session.rollback()
        existing = _find_intake(prescription.id, intake_date, time)
        if existing is None:
            raise
        existing.taken = taken
        db.session.commit()
        return existing, False

    logger.info("Intake recorded for prescription %s on %s %s", prescription.id, intake_date, time)
    return intake, True


def list_intakes(user: User, prescription_id: Optional[str] = None) -> List[MedicationIntake]:
    """Intakes newest first. Patients only see their own doses."""
    query = MedicationIntake.query
    if prescription_id:
        query = query.filter(MedicationIntake.prescription_id == prescription_id)

    if user.role == 'patient':
        query = query.filter(MedicationIntake.patient_id == user.id)
    else:
        # Providers see intakes for prescriptions they wrote
        query = query.join(Prescription).join(Appointment).filter(Appointment.provider_id == user.id)

    return query.order_by(MedicationIntake.date.desc(), MedicationIntake.time.desc()).all()
