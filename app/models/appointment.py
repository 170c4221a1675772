from app.extensions import db
from .base import TimestampMixin, generate_id

# Statuses that hold a slot; completed/cancelled are terminal and free it again
LIVE_STATUSES = ('upcoming', 'ongoing')
TERMINAL_STATUSES = ('completed', 'cancelled')
STATUSES = LIVE_STATUSES + TERMINAL_STATUSES

# Allowed forward moves of the appointment lifecycle
STATUS_TRANSITIONS = {
    'upcoming': ('ongoing', 'cancelled'),
    'ongoing': ('completed',),
    'completed': (),
    'cancelled': (),
}

_LIVE_SLOT_CONDITION = db.text("status IN ('upcoming', 'ongoing')")


class Appointment(db.Model, TimestampMixin):
    __tablename__ = 'appointments'

    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    patient_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False, index=True)
    provider_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False, index=True)

    # 'doctor' or 'caretaker', taken from the provider's role
    type = db.Column(db.String(20), nullable=False)

    date = db.Column(db.Date, nullable=False)
    time = db.Column(db.String(5), nullable=False)  # e.g. "09:00"
    status = db.Column(db.String(20), nullable=False, default='upcoming', index=True)
    location = db.Column(db.String(255))
    notes = db.Column(db.Text)

    patient = db.relationship('User', foreign_keys=[patient_id], lazy=True)
    provider = db.relationship('User', foreign_keys=[provider_id], lazy=True)
    prescriptions = db.relationship(
        'Prescription',
        backref='appointment',
        order_by='Prescription.position',
        cascade='all, delete-orphan',
        lazy=True,
    )

    __table_args__ = (
        # One live appointment per provider slot, enforced by the database
        db.Index(
            'uq_appointments_live_slot',
            'provider_id', 'date', 'time',
            unique=True,
            sqlite_where=_LIVE_SLOT_CONDITION,
            postgresql_where=_LIVE_SLOT_CONDITION,
        ),
    )

    def involves(self, user_id):
        return user_id in (self.patient_id, self.provider_id)

    def can_transition_to(self, new_status):
        return new_status in STATUS_TRANSITIONS.get(self.status, ())

    def to_dict(self):
        provider_name = self.provider.name if self.provider else None
        return {
            'id': self.id,
            'patient_id': self.patient_id,
            'patient_name': self.patient.name if self.patient else None,
            'provider_id': self.provider_id,
            'doctor_id': self.provider_id if self.type == 'doctor' else None,
            'doctor_name': provider_name if self.type == 'doctor' else None,
            'caretaker_id': self.provider_id if self.type == 'caretaker' else None,
            'caretaker_name': provider_name if self.type == 'caretaker' else None,
            'type': self.type,
            'date': self.date.isoformat() if self.date else None,
            'time': self.time,
            'status': self.status,
            'location': self.location,
            'notes': self.notes or '',
            'prescriptions': [p.to_dict() for p in self.prescriptions],
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f"<Appointment {self.patient_id} - {self.provider_id} on {self.date} {self.time}>"
