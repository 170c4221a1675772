from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required
from app.services.medication_service import record_intake, list_intakes
from app.utils.decorators import require_role, get_current_user
from app.utils.audit import log_audit

medication_bp = Blueprint('medication', __name__, url_prefix='/api/medication-intakes')


@medication_bp.route('', methods=['POST'])
@jwt_required()
@require_role('patient')
def create_intake():
    """
    Record whether a scheduled dose was taken.
    Writing the same prescription_id/date/time again overwrites "taken".

    Body:
        prescription_id, date (YYYY-MM-DD), time (HH:MM), taken (bool)
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not data:
        return jsonify({
            'success': False,
            'error': 'Request body must be a JSON object'
        }), 400

    user = get_current_user()
    intake, created = record_intake(user, data)

    log_audit('create' if created else 'update', intake, user,
              date=intake.date, time=intake.time, taken=intake.taken)

    return jsonify({
        'success': True,
        'data': intake.to_dict(),
        'created': created
    }), 201 if created else 200


@medication_bp.route('', methods=['GET'])
@jwt_required()
def get_intakes():
    """
    Query params:
        prescription_id: restrict to one prescription (optional)
    """
    prescription_id = request.args.get('prescription_id', type=str)
    intakes = list_intakes(get_current_user(), prescription_id)
    return jsonify({
        'success': True,
        'data': [i.to_dict() for i in intakes]
    }), 200
