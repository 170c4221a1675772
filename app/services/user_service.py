"""
User Service
Registration, credential checks and profile updates
"""
import logging
from typing import Any, Dict, Optional

from app.errors import ConflictError, NotFoundError, PermissionDeniedError, ValidationError
from app.models import User
from app.models.user import PROVIDER_ROLES, ROLES
from app.repositories import UserRepository
from app.utils.validators import (
    WEEKDAYS,
    optional_string,
    parse_float,
    parse_languages,
    require_fields,
    validate_availability_template,
    validate_choice,
    validate_email,
)

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6

TRANSPORTATION_TYPES = ('Personal Car', 'Ambulance', 'Public Transport', 'Wheelchair Accessible Vehicle')

# Plain profile fields copied as given
_TEXT_FIELDS = (
    'name', 'specialization', 'experience', 'bio', 'gender', 'phone', 'profile_image',
    'address', 'city', 'state', 'zip_code', 'country',
)

# Never changed through a profile update
_PROTECTED_FIELDS = ('id', 'email', 'role', 'password', 'password_hash', 'verified', 'rating')


def _apply_profile(user: User, data: Dict[str, Any]) -> None:
    for field in _TEXT_FIELDS:
        if field in data:
            setattr(user, field, optional_string(data[field], field))

    if 'languages' in data:
        user.languages = parse_languages(data['languages'])
    if 'latitude' in data:
        user.latitude = parse_float(data['latitude'], 'latitude')
    if 'longitude' in data:
        user.longitude = parse_float(data['longitude'], 'longitude')

    if 'available_slots' in data:
        if user.role not in PROVIDER_ROLES:
            raise ValidationError('Only doctors and caretakers can declare available slots')
        user.available_slots = validate_availability_template(data['available_slots'])

    if user.role == 'caretaker':
        if 'transportation_type' in data and data['transportation_type']:
            user.transportation_type = validate_choice(
                data['transportation_type'], TRANSPORTATION_TYPES, 'transportation_type'
            )
        if 'available_days' in data:
            if not isinstance(data['available_days'] or [], list):
                raise ValidationError('available_days must be a list of weekday names')
            days = [str(d).strip().lower() for d in data['available_days'] or []]
            for d in days:
                validate_choice(d, WEEKDAYS, 'available_days')
            user.available_days = days
        if 'available' in data:
            user.available = bool(data['available'])

    if user.role == 'medical-assistant':
        for field in ('medical_id', 'internship_certificate'):
            if field in data:
                setattr(user, field, optional_string(data[field], field))
        if 'digilocker_verified' in data:
            user.digilocker_verified = bool(data['digilocker_verified'])
        if 'available' in data:
            user.available = bool(data['available'])


def register_user(data: Dict[str, Any], users: Optional[UserRepository] = None) -> User:
    users = users or UserRepository()
    require_fields(data, 'name', 'email', 'password', 'role')

    role = validate_choice(data['role'], ROLES, 'role')
    email = validate_email(data['email'])
    if len(data['password']) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f'Password must be at least {MIN_PASSWORD_LENGTH} characters')
    if users.find_by_email(email):
        raise ConflictError('User with this email already exists')

    user = User(email=email, role=role, verified=False)
    if role in ('caretaker', 'medical-assistant'):
        user.available = True
    if role == 'doctor':
        user.available_slots = []
    _apply_profile(user, data)
    user.set_password(data['password'])

    users.insert(user)
    logger.info("Registered %s %s", role, user.id)
    return user


def authenticate(email: str, password: str, users: Optional[UserRepository] = None) -> Optional[User]:
    """Return the user when the credentials match, otherwise None."""
    users = users or UserRepository()
    if not email or not password:
        return None
    user = users.find_by_email(email.strip().lower())
    if not user or not user.check_password(password):
        return None
    return user


def update_profile(user_id: str, current_user: User, data: Dict[str, Any]) -> User:
    """Update the caller's own profile. Protected fields are ignored."""
    users = UserRepository()
    user = users.find_by_id(user_id)
    if not user:
        raise NotFoundError('User not found')
    if user.id != current_user.id:
        raise PermissionDeniedError('You can only update your own profile')

    updates = {k: v for k, v in data.items() if k not in _PROTECTED_FIELDS}
    if 'name' in updates and not str(updates['name'] or '').strip():
        raise ValidationError('name cannot be empty')
    _apply_profile(user, updates)
    return users.save(user)
