from .user import User
from .appointment import Appointment
from .prescription import Prescription
from .medication_intake import MedicationIntake
from .care_request import CaretakerRequest, MedicalVisitRequest
from .audit_log import AuditLog

__all__ = ["User", "Appointment", "Prescription", "MedicationIntake", "CaretakerRequest", "MedicalVisitRequest", "AuditLog"]
