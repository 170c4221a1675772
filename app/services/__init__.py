from .scheduling_service import (
    weekday_name,
    project_template,
    list_available_slots,
    create_booking,
)

from .appointment_service import (
    get_appointment_for_user,
    list_appointments_for_user,
    update_appointment,
    add_prescription,
    list_prescriptions,
)

from .medication_service import record_intake, list_intakes

from .request_service import (
    create_caretaker_request,
    list_caretaker_requests,
    update_caretaker_request_status,
    create_medical_visit_request,
    list_medical_visit_requests,
    update_medical_visit_status,
)

from .user_service import register_user, authenticate, update_profile

__all__ = [
    # Scheduling
    "weekday_name",
    "project_template",
    "list_available_slots",
    "create_booking",
    # Appointments
    "get_appointment_for_user",
    "list_appointments_for_user",
    "update_appointment",
    "add_prescription",
    "list_prescriptions",
    # Medication
    "record_intake",
    "list_intakes",
    # Requests
    "create_caretaker_request",
    "list_caretaker_requests",
    "update_caretaker_request_status",
    "create_medical_visit_request",
    "list_medical_visit_requests",
    "update_medical_visit_status",
    # Users
    "register_user",
    "authenticate",
    "update_profile",
]
