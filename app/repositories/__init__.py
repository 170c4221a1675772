from .user_repository import UserRepository
from .appointment_repository import AppointmentRepository

__all__ = ["UserRepository", "AppointmentRepository"]
