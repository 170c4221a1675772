from flask import Blueprint, request, jsonify
from flask_jwt_extended import create_access_token, jwt_required
from app.services.user_service import register_user, authenticate
from app.utils.decorators import get_current_user
import logging

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__, url_prefix='/api/auth')


def _issue_token(user):
    # Identity is the user id; role and email travel as extra claims
    return create_access_token(
        identity=str(user.id),
        additional_claims={
            "email": user.email,
            "role": user.role,
        },
    )


@auth_bp.route('/register', methods=['POST'])
def register():
    """
    Register a patient, doctor, caretaker or medical assistant.

    Body:
        name, email, password, role (required)
        available_slots: weekly template for doctors and caretakers (optional)
        any profile field (optional)
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not data:
        return jsonify({
            'success': False,
            'error': 'Request body must be a JSON object'
        }), 400

    user = register_user(data)
    return jsonify({
        'success': True,
        'data': {
            'user': user.to_dict(),
            'token': _issue_token(user),
            'token_type': 'bearer',
        },
        'message': 'Registration successful'
    }), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    """Login endpoint - authenticates by email and password and returns a JWT"""
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not data:
        return jsonify({
            'success': False,
            'error': 'Request body must be a JSON object'
        }), 400

    email = data.get('email')
    password = data.get('password')
    if not isinstance(email, str) or not isinstance(password, str) or not email or not password:
        return jsonify({
            'success': False,
            'error': 'Email and password required'
        }), 400

    user = authenticate(email, password)
    if not user:
        logger.info("Failed login for %s", email)
        return jsonify({
            'success': False,
            'error': 'Invalid email or password'
        }), 401

    return jsonify({
        'success': True,
        'data': {
            'user': user.to_dict(),
            'token': _issue_token(user),
            'token_type': 'bearer',
        }
    }), 200


@auth_bp.route('/me', methods=['GET'])
@jwt_required()
def me():
    """Get current logged-in user"""
    user = get_current_user()
    if not user:
        return jsonify({'success': False, 'error': 'User not found'}), 404

    return jsonify({
        'success': True,
        'data': user.to_dict()
    }), 200
