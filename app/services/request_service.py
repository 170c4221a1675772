"""
Request Service
Caretaker requests and home medical-visit requests raised by patients
"""
import logging
from datetime import date
from typing import Any, Dict, List

from sqlalchemy import or_

from app.errors import InvalidTransitionError, NotFoundError, PermissionDeniedError, ValidationError
from app.extensions import db
from app.models import CaretakerRequest, MedicalVisitRequest, User
from app.models.care_request import (
    CARETAKER_REQUEST_TRANSITIONS,
    MEDICAL_VISIT_TRANSITIONS,
    SERVICE_TYPES,
    URGENCY_LEVELS,
)
from app.repositories import UserRepository
from app.utils.validators import (
    optional_string,
    parse_date,
    parse_float,
    parse_optional_date,
    require_fields,
    validate_choice,
    validate_time,
)

logger = logging.getLogger(__name__)


# ---------- Caretaker requests ----------

def create_caretaker_request(patient: User, data: Dict[str, Any]) -> CaretakerRequest:
    require_fields(data, 'caretaker_id')
    caretaker = UserRepository().find_by_id(data['caretaker_id'])
    if not caretaker or caretaker.role != 'caretaker':
        raise NotFoundError('Caretaker not found')

    request_obj = CaretakerRequest(
        patient_id=patient.id,
        caretaker_id=caretaker.id,
        status='pending',
        request_date=date.today(),
        start_date=parse_optional_date(data.get('start_date'), 'start_date'),
        duration=optional_string(data.get('duration'), 'duration'),
        care_type=optional_string(data.get('care_type'), 'care_type'),
        message=optional_string(data.get('message'), 'message'),
    )
    db.session.add(request_obj)
    db.session.commit()
    logger.info("Caretaker request %s: patient %s -> caretaker %s", request_obj.id, patient.id, caretaker.id)
    return request_obj


def list_caretaker_requests(user: User) -> List[CaretakerRequest]:
    return CaretakerRequest.query.filter(
        or_(CaretakerRequest.patient_id == user.id, CaretakerRequest.caretaker_id == user.id)
    ).order_by(CaretakerRequest.request_date.desc(), CaretakerRequest.created_at.desc()).all()


def update_caretaker_request_status(request_id: str, user: User, new_status: str) -> CaretakerRequest:
    """
    The addressed caretaker accepts or rejects a pending request; the
    requesting patient may cancel it.
    """
    request_obj = db.session.get(CaretakerRequest, request_id)
    if not request_obj:
        raise NotFoundError('Caretaker request not found')

    validate_choice(new_status, tuple(CARETAKER_REQUEST_TRANSITIONS), 'status')
    if new_status in ('accepted', 'rejected') and user.id != request_obj.caretaker_id:
        raise PermissionDeniedError('Only the requested caretaker can accept or reject')
    if new_status == 'cancelled' and user.id != request_obj.patient_id:
        raise PermissionDeniedError('Only the requesting patient can cancel')
    if new_status == 'pending' or new_status not in CARETAKER_REQUEST_TRANSITIONS[request_obj.status]:
        raise InvalidTransitionError(
            f'Cannot change request status from {request_obj.status} to {new_status}'
        )

    request_obj.status = new_status
    db.session.commit()
    return request_obj


# ---------- Medical visit requests ----------

def create_medical_visit_request(patient: User, data: Dict[str, Any]) -> MedicalVisitRequest:
    require_fields(data, 'service_type', 'visit_date', 'visit_time', 'patient_address')
    service_type = validate_choice(data['service_type'], SERVICE_TYPES, 'service_type')
    urgency = validate_choice(data.get('urgency') or 'medium', URGENCY_LEVELS, 'urgency')

    visit_date = parse_date(data['visit_date'], 'visit_date')
    if visit_date < date.today():
        raise ValidationError('visit_date cannot be in the past')

    request_obj = MedicalVisitRequest(
        patient_id=patient.id,
        request_date=date.today(),
        visit_date=visit_date,
        visit_time=validate_time(data['visit_time'], 'visit_time'),
        status='pending',
        service_type=service_type,
        patient_address=data['patient_address'].strip(),
        patient_latitude=parse_float(data.get('patient_latitude'), 'patient_latitude'),
        patient_longitude=parse_float(data.get('patient_longitude'), 'patient_longitude'),
        notes=optional_string(data.get('notes'), 'notes'),
        urgency=urgency,
        estimated_duration=optional_string(data.get('estimated_duration'), 'estimated_duration'),
    )
    db.session.add(request_obj)
    db.session.commit()
    logger.info("Medical visit request %s created by patient %s (%s)", request_obj.id, patient.id, urgency)
    return request_obj


def list_medical_visit_requests(user: User) -> List[MedicalVisitRequest]:
    query = MedicalVisitRequest.query
    if user.role == 'medical-assistant':
        query = query.filter(or_(
            MedicalVisitRequest.status == 'pending',
            MedicalVisitRequest.medical_assistant_id == user.id,
        ))
    else:
        query = query.filter(MedicalVisitRequest.patient_id == user.id)
    return query.order_by(MedicalVisitRequest.visit_date.asc(), MedicalVisitRequest.visit_time.asc()).all()


def update_medical_visit_status(request_id: str, user: User, new_status: str) -> MedicalVisitRequest:
    """
    Move a visit request along pending -> accepted -> in-progress -> completed.

    Accepting assigns the calling medical assistant; later moves are limited
    to that assistant. The patient may cancel before the visit starts.
    """
    request_obj = db.session.get(MedicalVisitRequest, request_id)
    if not request_obj:
        raise NotFoundError('Medical visit request not found')

    validate_choice(new_status, tuple(MEDICAL_VISIT_TRANSITIONS), 'status')
    if new_status not in MEDICAL_VISIT_TRANSITIONS[request_obj.status]:
        raise InvalidTransitionError(
            f'Cannot change request status from {request_obj.status} to {new_status}'
        )

    if new_status == 'cancelled':
        if user.id not in (request_obj.patient_id, request_obj.medical_assistant_id):
            raise PermissionDeniedError('You cannot cancel this request')
    elif user.role != 'medical-assistant':
        raise PermissionDeniedError('Only medical assistants can update visit progress')
    elif new_status == 'accepted':
        request_obj.medical_assistant_id = user.id
    elif request_obj.medical_assistant_id != user.id:
        raise PermissionDeniedError('This request is assigned to another medical assistant')

    request_obj.status = new_status
    db.session.commit()
    logger.info("Medical visit request %s -> %s by %s", request_obj.id, new_status, user.id)
    return request_obj
