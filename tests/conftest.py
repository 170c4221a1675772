import pytest

from app import create_app
from app.extensions import db

# 2026-10-19 is a Monday
MONDAY = '2026-10-19'


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        db.create_all()

    # Each request pushes its own app context; tests open one for direct DB access
    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def register(client, role, email, name=None, password='secret123', **extra):
    """Register a user through the API; returns (user dict, auth headers)."""
    payload = {
        'name': name or email.split('@')[0].title(),
        'email': email,
        'password': password,
        'role': role,
    }
    payload.update(extra)
    response = client.post('/api/auth/register', json=payload)
    assert response.status_code == 201, response.get_json()
    body = response.get_json()['data']
    return body['user'], {'Authorization': f"Bearer {body['token']}"}


@pytest.fixture
def patient(client):
    return register(client, 'patient', 'patient@example.com', name='Pat Patient')


@pytest.fixture
def other_patient(client):
    return register(client, 'patient', 'other@example.com', name='Olive Other')


@pytest.fixture
def doctor(client):
    return register(
        client, 'doctor', 'doctor@example.com', name='Dr. Dee',
        specialization='Cardiology',
        available_slots=[{'day': 'monday', 'slots': ['09:00', '10:00']}],
    )


@pytest.fixture
def caretaker(client):
    return register(
        client, 'caretaker', 'caretaker@example.com', name='Cara Taker',
        available_slots=[{'day': 'wednesday', 'slots': ['08:00']}],
    )


@pytest.fixture
def assistant(client):
    return register(client, 'medical-assistant', 'assistant@example.com', name='Max Assist')
