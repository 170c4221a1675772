"""
Service-layer errors.

Services raise these; the error handler registered in ``create_app`` turns
them into the ``{'success': False, 'error': ...}`` envelope with the
matching status code.
"""


class ServiceError(Exception):
    status_code = 400
    code = 'error'
    default_message = 'Request could not be processed'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self):
        return {'success': False, 'error': self.message, 'code': self.code}


class ValidationError(ServiceError):
    code = 'validation_error'
    default_message = 'Invalid request'


class NotFoundError(ServiceError):
    status_code = 404
    code = 'not_found'
    default_message = 'Not found'


class PermissionDeniedError(ServiceError):
    status_code = 403
    code = 'permission_denied'
    default_message = 'Permission denied'


class ConflictError(ServiceError):
    status_code = 409
    code = 'conflict'
    default_message = 'Resource already exists'


class InvalidTransitionError(ServiceError):
    code = 'invalid_transition'
    default_message = 'Status change not allowed'


class NoAvailabilityError(ServiceError):
    code = 'no_availability'
    default_message = 'Provider has no available slots'


class SlotUnavailableError(ServiceError):
    code = 'slot_unavailable'
    default_message = 'Selected time slot is not available for this provider'


class SlotTakenError(ServiceError):
    status_code = 409
    code = 'slot_taken'
    default_message = 'This time slot is already booked'
