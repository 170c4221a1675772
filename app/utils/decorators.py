from functools import wraps
from flask import jsonify
from flask_jwt_extended import get_jwt_identity
from app.extensions import db
from app.models import User


def get_current_user():
    """
    Load the user behind the current JWT.
    Must be called inside a route protected by @jwt_required().
    """
    user_id = get_jwt_identity()
    if not user_id:
        return None
    return db.session.get(User, user_id)


def require_role(*roles):
    """
    Decorator to require specific roles
    Usage: @require_role('doctor', 'caretaker')
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            """
            Require that the current JWT-authenticated user has one of the given roles.
            Must be used together with @jwt_required() on the route.
            """
            user = get_current_user()
            if not user:
                return jsonify({
                    'success': False,
                    'error': 'Authentication required'
                }), 401

            if roles and user.role not in roles:
                return jsonify({
                    'success': False,
                    'error': f'Permission denied. Required roles: {", ".join(roles)}'
                }), 403

            return f(*args, **kwargs)
        return decorated_function
    return decorator
