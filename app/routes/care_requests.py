"""
Caretaker request and medical visit request routes
"""
from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required
from app.services.request_service import (
    create_caretaker_request,
    list_caretaker_requests,
    update_caretaker_request_status,
    create_medical_visit_request,
    list_medical_visit_requests,
    update_medical_visit_status,
)
from app.utils.decorators import require_role, get_current_user
from app.utils.audit import log_audit
from app.utils.validators import require_json_object

caretaker_request_bp = Blueprint('caretaker_request', __name__, url_prefix='/api/caretaker-requests')
medical_visit_bp = Blueprint('medical_visit', __name__, url_prefix='/api/medical-visit-requests')


def _json_body():
    return require_json_object(request.get_json(silent=True))


@caretaker_request_bp.route('', methods=['POST'])
@jwt_required()
@require_role('patient')
def create_caretaker():
    user = get_current_user()
    request_obj = create_caretaker_request(user, _json_body())
    log_audit('create', request_obj, user, caretaker_id=request_obj.caretaker_id)
    return jsonify({'success': True, 'data': request_obj.to_dict()}), 201


@caretaker_request_bp.route('', methods=['GET'])
@jwt_required()
def list_caretaker():
    requests = list_caretaker_requests(get_current_user())
    return jsonify({'success': True, 'data': [r.to_dict() for r in requests]}), 200


@caretaker_request_bp.route('/<request_id>', methods=['PUT'])
@jwt_required()
def update_caretaker(request_id):
    """Body: status (accepted, rejected or cancelled)"""
    user = get_current_user()
    status = _json_body().get('status')
    request_obj = update_caretaker_request_status(request_id, user, status)
    log_audit('status', request_obj, user)
    return jsonify({'success': True, 'data': request_obj.to_dict()}), 200


@medical_visit_bp.route('', methods=['POST'])
@jwt_required()
@require_role('patient')
def create_medical_visit():
    """
    Body:
        service_type, visit_date, visit_time, patient_address (required)
        patient_latitude, patient_longitude, notes, urgency, estimated_duration (optional)
    """
    user = get_current_user()
    request_obj = create_medical_visit_request(user, _json_body())
    log_audit('create', request_obj, user, service_type=request_obj.service_type,
              urgency=request_obj.urgency, visit_date=request_obj.visit_date)
    return jsonify({'success': True, 'data': request_obj.to_dict()}), 201


@medical_visit_bp.route('', methods=['GET'])
@jwt_required()
def list_medical_visits():
    requests = list_medical_visit_requests(get_current_user())
    return jsonify({'success': True, 'data': [r.to_dict() for r in requests]}), 200


@medical_visit_bp.route('/<request_id>', methods=['PATCH'])
@jwt_required()
def update_medical_visit(request_id):
    """Body: status (accepted, in-progress, completed or cancelled)"""
    user = get_current_user()
    status = _json_body().get('status')
    request_obj = update_medical_visit_status(request_id, user, status)
    log_audit('status', request_obj, user, medical_assistant_id=request_obj.medical_assistant_id)
    return jsonify({
        'success': True,
        'data': request_obj.to_dict(),
        'message': 'Status updated successfully'
    }), 200
