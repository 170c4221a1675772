from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required
from app.services.scheduling_service import create_booking
from app.services.appointment_service import (
    get_appointment_for_user,
    list_appointments_for_user,
    update_appointment,
    add_prescription,
    list_prescriptions,
)
from app.utils.decorators import require_role, get_current_user
from app.utils.audit import log_audit
from app.utils.validators import optional_string, parse_date, validate_time

appointment_bp = Blueprint('appointment', __name__, url_prefix='/api/appointments')


@appointment_bp.route('', methods=['GET'])
@jwt_required()
def list_appointments():
    """
    List appointments the caller takes part in (as patient or provider).
    Query params:
        status: upcoming, ongoing, completed or cancelled (optional)
    """
    status = request.args.get('status', type=str)
    appointments = list_appointments_for_user(get_current_user(), status)
    return jsonify({
        'success': True,
        'data': [apt.to_dict() for apt in appointments]
    }), 200


@appointment_bp.route('/<appointment_id>', methods=['GET'])
@jwt_required()
def get_appointment(appointment_id):
    appointment = get_appointment_for_user(appointment_id, get_current_user())
    return jsonify({
        'success': True,
        'data': appointment.to_dict()
    }), 200


@appointment_bp.route('', methods=['POST'])
@jwt_required()
@require_role('patient')
def create_appointment():
    """
    Book an appointment with a doctor or caretaker
    Access: patient

    Body:
        provider_id (or doctor_id / caretaker_id): provider user ID (required)
        date: YYYY-MM-DD (required)
        time: HH:MM, must match one of the provider's slots exactly (required)
        notes, location (optional)
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not data:
        return jsonify({
            'success': False,
            'error': 'Request body must be a JSON object'
        }), 400

    provider_id = data.get('provider_id') or data.get('doctor_id') or data.get('caretaker_id')
    if not provider_id or not isinstance(provider_id, str):
        return jsonify({
            'success': False,
            'error': 'Field "provider_id" is required'
        }), 400

    appointment_date = parse_date(data.get('date'))
    time = validate_time(data.get('time'))

    user = get_current_user()
    appointment = create_booking(
        provider_id,
        user.id,
        appointment_date,
        time,
        notes=optional_string(data.get('notes'), 'notes'),
        location=optional_string(data.get('location'), 'location'),
    )

    log_audit('create', appointment, user, provider_id=provider_id, date=appointment_date, time=time)

    return jsonify({
        'success': True,
        'data': appointment.to_dict(),
        'message': 'Appointment booked successfully'
    }), 201


@appointment_bp.route('/<appointment_id>', methods=['PUT'])
@jwt_required()
def update_appointment_route(appointment_id):
    """
    Update notes, location and/or status
    Access: the appointment's patient or provider
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not data:
        return jsonify({
            'success': False,
            'error': 'Request body must be a JSON object'
        }), 400

    user = get_current_user()
    appointment = update_appointment(appointment_id, user, data)

    log_audit('update', appointment, user,
              **{k: data[k] for k in ('status', 'notes', 'location') if k in data})

    return jsonify({
        'success': True,
        'data': appointment.to_dict(),
        'message': 'Appointment updated successfully'
    }), 200


@appointment_bp.route('/<appointment_id>/prescriptions', methods=['GET'])
@jwt_required()
def get_prescriptions(appointment_id):
    prescriptions = list_prescriptions(appointment_id, get_current_user())
    return jsonify({
        'success': True,
        'data': [p.to_dict() for p in prescriptions]
    }), 200


@appointment_bp.route('/<appointment_id>/prescriptions', methods=['POST'])
@jwt_required()
@require_role('doctor', 'caretaker')
def create_prescription(appointment_id):
    """
    Append a prescription to an appointment
    Access: the appointment's provider

    Body:
        medicine, dosage, duration (required)
        times: list of HH:MM intake times (required)
        notes (optional)
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not data:
        return jsonify({"success": False, "error": "Request body must be a JSON object"}), 400

    user = get_current_user()
    prescription = add_prescription(appointment_id, user, data)

    log_audit("create", prescription, user, appointment_id=appointment_id, medicine=prescription.medicine)

    return jsonify({
        "success": True,
        "data": prescription.to_dict(),
        "message": "Prescription added successfully"
    }), 201
