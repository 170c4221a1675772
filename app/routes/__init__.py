from .auth import auth_bp
from .users import users_bp
from .appointment import appointment_bp
from .medication import medication_bp
from .care_requests import caretaker_request_bp, medical_visit_bp
from .health import health_bp

__all__ = ['auth_bp', 'users_bp', 'appointment_bp', 'medication_bp', 'caretaker_request_bp', 'medical_visit_bp', 'health_bp']
