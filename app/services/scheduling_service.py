"""
Scheduling Service
Slot availability and booking-conflict checks for providers

A provider's weekly template is projected onto concrete calendar days; a
(date, time) pair is bookable when it appears in the template for that
weekday and no live (upcoming/ongoing) appointment already holds it.
Dates are plain calendar values and times are "HH:MM" strings compared
literally; no timezone conversion takes place.
"""
import logging
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from app.errors import (
    NoAvailabilityError,
    NotFoundError,
    SlotTakenError,
    SlotUnavailableError,
    ValidationError,
)
from app.models import Appointment
from app.models.appointment import LIVE_STATUSES
from app.models.user import PROVIDER_ROLES
from app.repositories import AppointmentRepository, UserRepository
from app.utils.validators import WEEKDAYS

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_DAYS = 7


def weekday_name(day: date) -> str:
    """Lower-case English weekday name, independent of the process locale."""
    return WEEKDAYS[day.weekday()]


def slots_for_day(template: Optional[List[Dict[str, Any]]], day_name: str) -> List[str]:
    """Slot times declared for ``day_name``, in template order."""
    for entry in template or []:
        if entry.get('day') == day_name:
            return list(entry.get('slots') or [])
    return []


def has_any_slot(template: Optional[List[Dict[str, Any]]]) -> bool:
    return any(entry.get('slots') for entry in template or [])


def project_template(
    template: Optional[List[Dict[str, Any]]],
    booked: set,
    start: date,
    window_days: int,
) -> List[Dict[str, str]]:
    """
    Expand a weekly template into concrete candidates.

    Args:
        template: [{"day": "monday", "slots": ["09:00", ...]}, ...]
        booked: set of (date, time) pairs already held by live appointments
        start: first calendar day of the window (inclusive)
        window_days: number of consecutive days to cover

    Returns:
        list[dict]: [{"date": "2026-10-19", "time": "09:00", "day": "monday"}, ...]
        ordered by date, then by the template's slot order.
    """
    candidates = []
    for offset in range(window_days):
        day = start + timedelta(days=offset)
        day_name = weekday_name(day)
        for time in slots_for_day(template, day_name):
            if (day, time) in booked:
                continue
            candidates.append({
                'date': day.isoformat(),
                'time': time,
                'day': day_name,
            })
    return candidates


def _get_provider(provider_id: str, users: UserRepository):
    provider = users.find_by_id(provider_id)
    if not provider or provider.role not in PROVIDER_ROLES:
        raise NotFoundError('Provider not found')
    return provider


def list_available_slots(
    provider_id: str,
    window_days: int = DEFAULT_WINDOW_DAYS,
    today: Optional[date] = None,
    users: Optional[UserRepository] = None,
    appointments: Optional[AppointmentRepository] = None,
) -> List[Dict[str, str]]:
    """
    Bookable (date, time) pairs for a provider over the next ``window_days``
    days, starting at ``today`` (defaults to the local current date).
    """
    users = users or UserRepository()
    appointments = appointments or AppointmentRepository()

    provider = _get_provider(provider_id, users)
    template = provider.available_slots
    if not has_any_slot(template) or window_days <= 0:
        return []

    start = today or date.today()
    if (date.max - start).days < window_days - 1:
        raise ValidationError('Booking window runs past the last supported date')
    end = start + timedelta(days=window_days - 1)
    booked = {
        (apt.date, apt.time)
        for apt in appointments.find_live_for_provider(provider.id, start, end)
        if apt.status in LIVE_STATUSES
    }
    return project_template(template, booked, start, window_days)


def create_booking(
    provider_id: str,
    patient_id: str,
    appointment_date: date,
    time: str,
    notes: Optional[str] = None,
    location: Optional[str] = None,
    users: Optional[UserRepository] = None,
    appointments: Optional[AppointmentRepository] = None,
) -> Appointment:
    """
    Book ``time`` on ``appointment_date`` with a provider.

    Raises:
        NotFoundError: provider does not exist
        NoAvailabilityError: provider declared no slots at all
        SlotUnavailableError: (date, time) is not in the provider's template
        SlotTakenError: a live appointment already holds the slot, either
            found by the pre-check or reported by the store on insert
    """
    users = users or UserRepository()
    appointments = appointments or AppointmentRepository()

    provider = _get_provider(provider_id, users)
    template = provider.available_slots
    if not has_any_slot(template):
        raise NoAvailabilityError()

    if time not in slots_for_day(template, weekday_name(appointment_date)):
        raise SlotUnavailableError()

    if appointments.find_by_provider_date_time(provider.id, appointment_date, time, LIVE_STATUSES):
        raise SlotTakenError()

    appointment = Appointment(
        patient_id=patient_id,
        provider_id=provider.id,
        type=provider.role,
        date=appointment_date,
        time=time,
        status='upcoming',
        notes=notes,
        location=location,
    )
    appointments.insert(appointment)

    logger.info(
        "Appointment %s booked: patient %s with %s %s on %s %s",
        appointment.id, patient_id, provider.role, provider.id, appointment_date, time,
    )
    return appointment
