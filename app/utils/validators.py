"""
Request payload validators.

Each helper returns the normalized value or raises ``ValidationError`` with a
message naming the offending field.
"""
import re
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from app.errors import ValidationError

WEEKDAYS = ('monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday', 'sunday')

_TIME_RE = re.compile(r'^([01]\d|2[0-3]):[0-5]\d$')
_EMAIL_RE = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')


def require_json_object(data: Any) -> Dict[str, Any]:
    if not isinstance(data, dict) or not data:
        raise ValidationError('Request body must be a JSON object')
    return data


def require_fields(data: Dict[str, Any], *fields: str) -> None:
    """Every named field must be a non-blank string."""
    for field in fields:
        value = data.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(f'Field "{field}" is required')
        if not isinstance(value, str):
            raise ValidationError(f'Field "{field}" must be a string')


def optional_string(value: Any, field_name: str) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    raise ValidationError(f'Field "{field_name}" must be a string')


def parse_date(value: Any, field_name: str = 'date') -> date:
    """Parse a YYYY-MM-DD string into a ``date``."""
    if isinstance(value, date):
        return value
    if not value:
        raise ValidationError(f'Field "{field_name}" is required')
    try:
        return datetime.strptime(str(value).strip(), '%Y-%m-%d').date()
    except ValueError:
        raise ValidationError(f'Invalid {field_name} format. Use YYYY-MM-DD')


def parse_optional_date(value: Any, field_name: str) -> Optional[date]:
    if value in (None, ''):
        return None
    return parse_date(value, field_name)


def validate_time(value: Any, field_name: str = 'time') -> str:
    """Check an HH:MM wall-clock string. No reformatting is applied."""
    if not isinstance(value, str) or not _TIME_RE.match(value):
        raise ValidationError(f'Invalid {field_name} format. Use HH:MM (e.g., 09:30)')
    return value


def validate_email(value: Any) -> str:
    if not isinstance(value, str) or not _EMAIL_RE.match(value.strip()):
        raise ValidationError('Invalid email address')
    return value.strip().lower()


def validate_choice(value: Any, choices, field_name: str) -> str:
    if value not in choices:
        raise ValidationError(f'Invalid {field_name}. Valid values: {", ".join(choices)}')
    return value


def parse_float(value: Any, field_name: str) -> Optional[float]:
    if value in (None, ''):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(f'{field_name} must be a number')


def parse_languages(value: Any) -> List[str]:
    """Accept a list or a comma separated string."""
    if not value:
        return []
    if isinstance(value, list):
        return [str(lang).strip() for lang in value if str(lang).strip()]
    return [lang.strip() for lang in str(value).split(',') if lang.strip()]


def validate_availability_template(value: Any) -> List[Dict[str, Any]]:
    """
    Validate a weekly availability template.

    Expected shape: ``[{"day": "monday", "slots": ["09:00", "10:00"]}, ...]``.
    Day names are lower-cased; at most one entry per day is allowed. Slot
    order is preserved as given and duplicate times within a day are dropped.
    """
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValidationError('available_slots must be a list of {day, slots} entries')

    template = []
    seen_days = set()
    for idx, entry in enumerate(value, start=1):
        if not isinstance(entry, dict):
            raise ValidationError(f'available_slots entry {idx} must be an object')
        day = str(entry.get('day') or '').strip().lower()
        if day not in WEEKDAYS:
            raise ValidationError(f'available_slots entry {idx}: invalid day "{entry.get("day")}"')
        if day in seen_days:
            raise ValidationError(f'available_slots entry {idx}: duplicate day "{day}"')
        seen_days.add(day)

        slots = entry.get('slots') or []
        if not isinstance(slots, list):
            raise ValidationError(f'available_slots entry {idx}: slots must be a list')
        normalized = []
        for slot in slots:
            validate_time(slot, f'slot in available_slots entry {idx}')
            if slot not in normalized:
                normalized.append(slot)
        template.append({'day': day, 'slots': normalized})
    return template
