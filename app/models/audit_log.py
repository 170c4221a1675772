"""
Who changed an appointment, prescription, intake or request, and what it became.
"""
from app.extensions import db
from datetime import datetime

AUDITED_ENTITIES = {
    'appointments': 'appointment',
    'prescriptions': 'prescription',
    'medication_intakes': 'medication_intake',
    'caretaker_requests': 'caretaker_request',
    'medical_visit_requests': 'medical_visit_request',
}


class AuditLog(db.Model):
    __tablename__ = "audit_logs"

    id = db.Column(db.Integer, primary_key=True)
    entity_type = db.Column(db.String(32), nullable=False, index=True)
    entity_id = db.Column(db.String(36), nullable=False, index=True)
    action = db.Column(db.String(16), nullable=False)  # create, update, status
    actor_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=True, index=True)
    actor_role = db.Column(db.String(20), nullable=True)
    # Status of the entity after the action, when it has one
    status = db.Column(db.String(20), nullable=True)
    changes = db.Column(db.JSON, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "action": self.action,
            "actor_id": self.actor_id,
            "actor_role": self.actor_role,
            "status": self.status,
            "changes": self.changes or {},
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
