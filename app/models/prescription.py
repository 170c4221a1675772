from app.extensions import db
from .base import TimestampMixin, generate_id


class Prescription(db.Model, TimestampMixin):
    """
    Prescription attached to an appointment.

    Prescriptions are append-only: there is no edit or delete path, and
    ``position`` keeps them in the order the provider added them.
    """

    __tablename__ = "prescriptions"

    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    appointment_id = db.Column(
        db.String(36), db.ForeignKey("appointments.id"), nullable=False, index=True
    )
    position = db.Column(db.Integer, nullable=False, default=0)

    medicine = db.Column(db.String(255), nullable=False)
    dosage = db.Column(db.String(50), nullable=False)  # e.g., "500mg"
    times = db.Column(db.JSON, nullable=False, default=list)  # e.g., ["08:00", "20:00"]
    duration = db.Column(db.String(50), nullable=False)  # e.g., "7 days"
    notes = db.Column(db.Text, nullable=True)

    def __repr__(self):
        return f"<Prescription {self.id} - {self.medicine}>"

    def to_dict(self):
        return {
            "id": self.id,
            "appointment_id": self.appointment_id,
            "medicine": self.medicine,
            "dosage": self.dosage,
            "times": list(self.times or []),
            "duration": self.duration,
            "notes": self.notes or "",
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
