from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import jwt_required
from app.errors import NotFoundError, ValidationError
from app.models.user import ROLES
from app.repositories import UserRepository
from app.services.scheduling_service import list_available_slots
from app.services.user_service import update_profile
from app.utils.decorators import get_current_user
from app.utils.validators import parse_date, validate_choice

users_bp = Blueprint('users', __name__, url_prefix='/api/users')


@users_bp.route('', methods=['GET'])
@jwt_required()
def list_users():
    """
    List users (never includes password hashes).
    Query params:
        role: patient, doctor, caretaker or medical-assistant (optional)
    """
    role = request.args.get('role', type=str)
    if role:
        validate_choice(role, ROLES, 'role')

    users = UserRepository().list(role)
    return jsonify({
        'success': True,
        'data': [u.to_dict() for u in users]
    }), 200


@users_bp.route('/<user_id>', methods=['GET'])
@jwt_required()
def get_user(user_id):
    user = UserRepository().find_by_id(user_id)
    if not user:
        raise NotFoundError('User not found')
    return jsonify({'success': True, 'data': user.to_dict()}), 200


@users_bp.route('/<user_id>', methods=['PUT'])
@jwt_required()
def update_user(user_id):
    """Update own profile. Email, role and password cannot be changed here."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not data:
        return jsonify({
            'success': False,
            'error': 'Request body must be a JSON object'
        }), 400

    user = update_profile(user_id, get_current_user(), data)
    return jsonify({
        'success': True,
        'data': user.to_dict(),
        'message': 'Profile updated successfully'
    }), 200


@users_bp.route('/<user_id>/available-slots', methods=['GET'])
@jwt_required()
def available_slots(user_id):
    """
    Bookable slots of a doctor or caretaker.
    Query params:
        days: window length in days (default BOOKING_WINDOW_DAYS)
        start: first day of the window, YYYY-MM-DD (default today)
    """
    days = request.args.get('days', current_app.config['BOOKING_WINDOW_DAYS'], type=int)
    max_days = current_app.config['BOOKING_WINDOW_MAX_DAYS']
    if days < 1 or days > max_days:
        raise ValidationError(f'days must be between 1 and {max_days}')

    start = request.args.get('start', type=str)
    start_date = parse_date(start, 'start') if start else None

    slots = list_available_slots(user_id, window_days=days, today=start_date)
    return jsonify({
        'success': True,
        'data': slots,
        'window_days': days,
    }), 200
