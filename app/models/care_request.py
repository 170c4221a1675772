"""
Caretaker and medical-visit requests raised by patients.
"""
from app.extensions import db
from .base import TimestampMixin, generate_id

CARETAKER_REQUEST_TRANSITIONS = {
    'pending': ('accepted', 'rejected', 'cancelled'),
    'accepted': ('cancelled',),
    'rejected': (),
    'cancelled': (),
}

SERVICE_TYPES = (
    'vitals-check',
    'post-surgery-care',
    'medication-monitoring',
    'hospital-escort',
    'patient-education',
)
URGENCY_LEVELS = ('low', 'medium', 'high')

MEDICAL_VISIT_TRANSITIONS = {
    'pending': ('accepted', 'cancelled'),
    'accepted': ('in-progress', 'cancelled'),
    'in-progress': ('completed',),
    'completed': (),
    'cancelled': (),
}


class CaretakerRequest(db.Model, TimestampMixin):
    __tablename__ = 'caretaker_requests'

    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    patient_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False, index=True)
    caretaker_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False, index=True)

    # pending, accepted, rejected, cancelled
    status = db.Column(db.String(20), nullable=False, default='pending')
    request_date = db.Column(db.Date, nullable=False)
    start_date = db.Column(db.Date)
    duration = db.Column(db.String(50))
    care_type = db.Column(db.String(100))
    message = db.Column(db.Text)

    patient = db.relationship('User', foreign_keys=[patient_id], lazy=True)
    caretaker = db.relationship('User', foreign_keys=[caretaker_id], lazy=True)

    def to_dict(self):
        return {
            'id': self.id,
            'patient_id': self.patient_id,
            'patient_name': self.patient.name if self.patient else None,
            'caretaker_id': self.caretaker_id,
            'caretaker_name': self.caretaker.name if self.caretaker else None,
            'status': self.status,
            'request_date': self.request_date.isoformat() if self.request_date else None,
            'start_date': self.start_date.isoformat() if self.start_date else None,
            'duration': self.duration,
            'care_type': self.care_type,
            'message': self.message,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }


class MedicalVisitRequest(db.Model, TimestampMixin):
    __tablename__ = 'medical_visit_requests'

    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    patient_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False, index=True)
    # Set when a medical assistant accepts the request
    medical_assistant_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=True, index=True)

    request_date = db.Column(db.Date, nullable=False)
    visit_date = db.Column(db.Date, nullable=False)
    visit_time = db.Column(db.String(5), nullable=False)
    status = db.Column(db.String(20), nullable=False, default='pending', index=True)
    service_type = db.Column(db.String(50), nullable=False)
    patient_address = db.Column(db.String(255), nullable=False)
    patient_latitude = db.Column(db.Float)
    patient_longitude = db.Column(db.Float)
    notes = db.Column(db.Text)
    urgency = db.Column(db.String(10), nullable=False, default='medium')
    estimated_duration = db.Column(db.String(50))

    patient = db.relationship('User', foreign_keys=[patient_id], lazy=True)
    medical_assistant = db.relationship('User', foreign_keys=[medical_assistant_id], lazy=True)

    def to_dict(self):
        return {
            'id': self.id,
            'patient_id': self.patient_id,
            'patient_name': self.patient.name if self.patient else None,
            'medical_assistant_id': self.medical_assistant_id,
            'medical_assistant_name': self.medical_assistant.name if self.medical_assistant else None,
            'request_date': self.request_date.isoformat() if self.request_date else None,
            'visit_date': self.visit_date.isoformat() if self.visit_date else None,
            'visit_time': self.visit_time,
            'status': self.status,
            'service_type': self.service_type,
            'patient_address': self.patient_address,
            'patient_latitude': self.patient_latitude,
            'patient_longitude': self.patient_longitude,
            'notes': self.notes,
            'urgency': self.urgency,
            'estimated_duration': self.estimated_duration,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }
