from .decorators import require_role, get_current_user

from .audit import log_audit

from .validators import (
    WEEKDAYS,
    parse_date,
    validate_time,
    validate_availability_template,
)

__all__ = [
    # Decorators
    "require_role",
    "get_current_user",
    # Audit
    "log_audit",
    # Validators
    "WEEKDAYS",
    "parse_date",
    "validate_time",
    "validate_availability_template",
]
