from app.extensions import db
from .base import TimestampMixin, generate_id


class MedicationIntake(db.Model, TimestampMixin):
    """One scheduled dose of a prescription, keyed by (prescription, date, time)."""
    __tablename__ = 'medication_intakes'

    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    prescription_id = db.Column(db.String(36), db.ForeignKey('prescriptions.id'), nullable=False, index=True)
    patient_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False, index=True)
    medicine = db.Column(db.String(255), nullable=False)
    date = db.Column(db.Date, nullable=False)
    time = db.Column(db.String(5), nullable=False)
    taken = db.Column(db.Boolean, nullable=False, default=False)

    prescription = db.relationship('Prescription', lazy=True)

    __table_args__ = (
        db.UniqueConstraint('prescription_id', 'date', 'time', name='uq_medication_intake_dose'),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'prescription_id': self.prescription_id,
            'patient_id': self.patient_id,
            'medicine': self.medicine,
            'date': self.date.isoformat() if self.date else None,
            'time': self.time,
            'taken': self.taken,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f"<MedicationIntake {self.prescription_id} {self.date} {self.time} taken={self.taken}>"
