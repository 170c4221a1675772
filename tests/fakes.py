"""
In-memory repositories with the same methods as the SQLAlchemy ones.
"""
import uuid
from datetime import datetime

from app.errors import SlotTakenError
from app.models.appointment import LIVE_STATUSES


class InMemoryUserRepository:

    def __init__(self, users=()):
        self.users = {u.id: u for u in users}

    def find_by_id(self, user_id):
        return self.users.get(user_id)

    def find_by_email(self, email):
        return next((u for u in self.users.values() if u.email == email), None)

    def list(self, role=None):
        return [u for u in self.users.values() if role is None or u.role == role]

    def insert(self, user):
        if user.id is None:
            user.id = str(uuid.uuid4())
        self.users[user.id] = user
        return user

    def save(self, user):
        return user


class InMemoryAppointmentRepository:
    """Enforces the live-slot uniqueness rule the database index provides."""

    def __init__(self, appointments=()):
        self.appointments = list(appointments)
        self.insert_calls = 0

    def find_by_id(self, appointment_id):
        return next((a for a in self.appointments if a.id == appointment_id), None)

    def find_by_provider_date_time(self, provider_id, appointment_date, time, statuses=LIVE_STATUSES):
        return self._match(provider_id, appointment_date, time, statuses)

    def _match(self, provider_id, appointment_date, time, statuses=LIVE_STATUSES):
        return next(
            (a for a in self.appointments
             if a.provider_id == provider_id and a.date == appointment_date
             and a.time == time and a.status in statuses),
            None,
        )

    def find_live_for_provider(self, provider_id, start, end):
        return [
            a for a in self.appointments
            if a.provider_id == provider_id and start <= a.date <= end and a.status in LIVE_STATUSES
        ]

    def list_for_user(self, user_id, status=None):
        return [
            a for a in self.appointments
            if user_id in (a.patient_id, a.provider_id) and (status is None or a.status == status)
        ]

    def insert(self, appointment):
        self.insert_calls += 1
        if self._match(appointment.provider_id, appointment.date, appointment.time):
            raise SlotTakenError()
        if appointment.id is None:
            appointment.id = str(uuid.uuid4())
        now = datetime.utcnow()
        appointment.created_at = appointment.created_at or now
        appointment.updated_at = appointment.updated_at or now
        self.appointments.append(appointment)
        return appointment

    def save(self, appointment):
        return appointment
