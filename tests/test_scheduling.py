"""
Slot projection and booking guard, run against in-memory repositories.
"""
from datetime import date, timedelta

import pytest

from app.errors import NoAvailabilityError, NotFoundError, SlotTakenError, SlotUnavailableError, ValidationError
from app.models import Appointment, User
from app.services.scheduling_service import (
    create_booking,
    list_available_slots,
    project_template,
    slots_for_day,
    weekday_name,
)
from tests.fakes import InMemoryAppointmentRepository, InMemoryUserRepository

MONDAY = date(2026, 10, 19)


def make_provider(template, provider_id='doc-1', role='doctor'):
    return User(id=provider_id, name='Dr. Test', email=f'{provider_id}@example.com', role=role,
                available_slots=template)


def make_appointment(day, time, status='upcoming', provider_id='doc-1', patient_id='pat-1'):
    return Appointment(id=f'apt-{day}-{time}-{status}', provider_id=provider_id, patient_id=patient_id,
                       type='doctor', date=day, time=time, status=status)


@pytest.fixture
def repos():
    users = InMemoryUserRepository([
        make_provider([{'day': 'monday', 'slots': ['09:00', '10:00']}]),
        make_provider([], provider_id='doc-empty'),
        make_provider(None, provider_id='doc-none'),
        make_provider([{'day': 'monday', 'slots': []}], provider_id='doc-blank-day'),
        User(id='pat-1', name='Pat', email='pat@example.com', role='patient'),
    ])
    return users, InMemoryAppointmentRepository()


def slots(repos, provider_id='doc-1', window_days=7, today=MONDAY):
    users, appointments = repos
    return list_available_slots(provider_id, window_days, today=today, users=users, appointments=appointments)


def book(repos, day=MONDAY, time='09:00', provider_id='doc-1'):
    users, appointments = repos
    return create_booking(provider_id, 'pat-1', day, time, users=users, appointments=appointments)


def test_weekday_name_is_lowercase_english():
    assert weekday_name(MONDAY) == 'monday'
    assert weekday_name(MONDAY + timedelta(days=6)) == 'sunday'


def test_slots_for_day_keeps_template_order():
    template = [{'day': 'friday', 'slots': ['15:00', '09:00', '11:30']}]
    assert slots_for_day(template, 'friday') == ['15:00', '09:00', '11:30']
    assert slots_for_day(template, 'monday') == []
    assert slots_for_day(None, 'friday') == []


@pytest.mark.parametrize('provider_id', ['doc-empty', 'doc-none', 'doc-blank-day'])
def test_empty_template_yields_no_slots(repos, provider_id):
    assert slots(repos, provider_id) == []


def test_unknown_provider_is_not_found(repos):
    with pytest.raises(NotFoundError):
        slots(repos, 'nobody')


def test_patient_is_not_a_provider(repos):
    with pytest.raises(NotFoundError):
        slots(repos, 'pat-1')


def test_week_window_from_monday(repos):
    result = slots(repos)
    assert result == [
        {'date': '2026-10-19', 'time': '09:00', 'day': 'monday'},
        {'date': '2026-10-19', 'time': '10:00', 'day': 'monday'},
    ]


def test_window_reaching_next_monday_repeats_slots(repos):
    result = slots(repos, window_days=8)
    assert [(s['date'], s['time']) for s in result] == [
        ('2026-10-19', '09:00'),
        ('2026-10-19', '10:00'),
        ('2026-10-26', '09:00'),
        ('2026-10-26', '10:00'),
    ]


def test_window_starting_midweek_includes_following_monday(repos):
    result = slots(repos, today=MONDAY + timedelta(days=3))
    assert {s['date'] for s in result} == {'2026-10-26'}


def test_every_candidate_is_in_template():
    template = [
        {'day': 'tuesday', 'slots': ['14:00', '08:00']},
        {'day': 'saturday', 'slots': ['11:00']},
    ]
    result = project_template(template, set(), MONDAY, 21)
    assert len(result) == 9
    for candidate in result:
        day = date.fromisoformat(candidate['date'])
        assert candidate['time'] in slots_for_day(template, weekday_name(day))


def test_within_day_order_is_template_order():
    template = [{'day': 'monday', 'slots': ['14:00', '08:00']}]
    result = project_template(template, set(), MONDAY, 1)
    assert [c['time'] for c in result] == ['14:00', '08:00']


@pytest.mark.parametrize('status, listed', [
    ('upcoming', False),
    ('ongoing', False),
    ('cancelled', True),
    ('completed', True),
])
def test_only_live_appointments_hide_a_slot(repos, status, listed):
    _, appointments = repos
    appointments.appointments.append(make_appointment(MONDAY, '09:00', status=status))

    times = [s['time'] for s in slots(repos)]
    assert ('09:00' in times) is listed
    assert '10:00' in times


def test_other_providers_bookings_do_not_hide_slots(repos):
    _, appointments = repos
    appointments.appointments.append(make_appointment(MONDAY, '09:00', provider_id='doc-other'))
    assert len(slots(repos)) == 2


def test_booking_creates_upcoming_appointment(repos):
    appointment = book(repos)
    assert appointment.status == 'upcoming'
    assert appointment.type == 'doctor'
    assert appointment.id
    assert appointment.created_at is not None


def test_second_sequential_booking_is_taken(repos):
    book(repos)
    with pytest.raises(SlotTakenError):
        book(repos)


def test_booking_unknown_provider(repos):
    with pytest.raises(NotFoundError):
        book(repos, provider_id='nobody')


@pytest.mark.parametrize('provider_id', ['doc-empty', 'doc-none', 'doc-blank-day'])
def test_booking_without_any_slots(repos, provider_id):
    with pytest.raises(NoAvailabilityError):
        book(repos, provider_id=provider_id)


@pytest.mark.parametrize('day, time', [
    (MONDAY + timedelta(days=1), '09:00'),  # tuesday not in template
    (MONDAY, '11:00'),                       # time not in monday slots
    (MONDAY, '9:00'),                        # no format tolerance
])
def test_booking_outside_template(repos, day, time):
    with pytest.raises(SlotUnavailableError):
        book(repos, day=day, time=time)


def test_off_template_wins_over_existing_appointments(repos):
    _, appointments = repos
    appointments.appointments.append(make_appointment(MONDAY, '11:00'))
    with pytest.raises(SlotUnavailableError):
        book(repos, time='11:00')


def test_cancelled_appointment_frees_the_slot(repos):
    first = book(repos)
    first.status = 'cancelled'
    second = book(repos)
    assert second.id != first.id


class StaleReadAppointmentRepository(InMemoryAppointmentRepository):
    """Pre-check misses a concurrent writer; only insert sees it."""

    def find_by_provider_date_time(self, *args, **kwargs):
        return None


def test_race_loser_gets_slot_taken_at_write_time():
    users = InMemoryUserRepository([make_provider([{'day': 'monday', 'slots': ['09:00']}])])
    appointments = StaleReadAppointmentRepository()

    create_booking('doc-1', 'pat-1', MONDAY, '09:00', users=users, appointments=appointments)
    with pytest.raises(SlotTakenError):
        create_booking('doc-1', 'pat-2', MONDAY, '09:00', users=users, appointments=appointments)

    assert appointments.insert_calls == 2
    assert len(appointments.appointments) == 1


def test_window_past_last_representable_date_is_rejected(repos):
    with pytest.raises(ValidationError):
        slots(repos, today=date.max - timedelta(days=1))


def test_window_ending_on_last_representable_date(repos):
    # 9999-12-31 is a friday
    assert slots(repos, window_days=1, today=date.max) == []
