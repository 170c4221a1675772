import pytest

from tests.conftest import register


def test_register_returns_token_and_hides_password(client):
    response = client.post('/api/auth/register', json={
        'name': 'Pat', 'email': 'Pat@Example.com', 'password': 'secret123', 'role': 'patient',
    })
    assert response.status_code == 201
    body = response.get_json()
    assert body['success'] is True
    assert body['data']['token']
    assert body['data']['token_type'] == 'bearer'
    user = body['data']['user']
    assert user['email'] == 'pat@example.com'
    assert user['verified'] is False
    assert 'password' not in user
    assert 'password_hash' not in user


def test_duplicate_email_is_conflict(client, patient):
    response = client.post('/api/auth/register', json={
        'name': 'Again', 'email': 'patient@example.com', 'password': 'secret123', 'role': 'patient',
    })
    assert response.status_code == 409
    assert response.get_json()['code'] == 'conflict'


@pytest.mark.parametrize('overrides', [
    {'role': 'admin'},
    {'email': 'not-an-email'},
    {'password': '123'},
    {'name': ''},
])
def test_register_validation(client, overrides):
    payload = {'name': 'Val', 'email': 'val@example.com', 'password': 'secret123', 'role': 'patient'}
    payload.update(overrides)
    response = client.post('/api/auth/register', json=payload)
    assert response.status_code == 400
    assert response.get_json()['success'] is False


def test_register_rejects_bad_template(client):
    response = client.post('/api/auth/register', json={
        'name': 'Doc', 'email': 'doc@example.com', 'password': 'secret123', 'role': 'doctor',
        'available_slots': [{'day': 'funday', 'slots': ['09:00']}],
    })
    assert response.status_code == 400


def test_patient_cannot_declare_slots(client):
    response = client.post('/api/auth/register', json={
        'name': 'Pat', 'email': 'p2@example.com', 'password': 'secret123', 'role': 'patient',
        'available_slots': [{'day': 'monday', 'slots': ['09:00']}],
    })
    assert response.status_code == 400


def test_template_is_normalized(client):
    user, _ = register(
        client, 'doctor', 'norm@example.com',
        available_slots=[{'day': 'Monday', 'slots': ['10:00', '09:00', '10:00']}],
    )
    assert user['available_slots'] == [{'day': 'monday', 'slots': ['10:00', '09:00']}]


def test_login_and_me(client, patient):
    pat, _ = patient
    response = client.post('/api/auth/login', json={'email': 'patient@example.com', 'password': 'secret123'})
    assert response.status_code == 200
    token = response.get_json()['data']['token']

    me = client.get('/api/auth/me', headers={'Authorization': f'Bearer {token}'})
    assert me.status_code == 200
    assert me.get_json()['data']['id'] == pat['id']


def test_me_follows_each_requests_token(client, patient, doctor):
    pat, headers = patient
    doc, doc_headers = doctor

    assert client.get('/api/auth/me', headers=headers).get_json()['data']['id'] == pat['id']
    assert client.get('/api/auth/me', headers=doc_headers).get_json()['data']['id'] == doc['id']
    assert client.get('/api/auth/me', headers=headers).get_json()['data']['id'] == pat['id']


def test_login_with_wrong_password(client, patient):
    response = client.post('/api/auth/login', json={'email': 'patient@example.com', 'password': 'wrong-pass'})
    assert response.status_code == 401
    assert response.get_json()['success'] is False


def test_invalid_token_is_rejected(client):
    response = client.get('/api/auth/me', headers={'Authorization': 'Bearer not.a.token'})
    assert response.status_code == 401


def test_list_users_by_role(client, patient, doctor, caretaker):
    _, headers = patient
    response = client.get('/api/users?role=doctor', headers=headers)
    assert response.status_code == 200
    assert [u['email'] for u in response.get_json()['data']] == ['doctor@example.com']
    assert client.get('/api/users?role=wizard', headers=headers).status_code == 400


def test_update_own_profile_ignores_protected_fields(client, doctor):
    doc, headers = doctor
    response = client.put(f'/api/users/{doc["id"]}', json={
        'bio': 'Heart specialist',
        'role': 'patient',
        'email': 'hijack@example.com',
        'verified': True,
        'available_slots': [{'day': 'friday', 'slots': ['14:00']}],
    }, headers=headers)
    assert response.status_code == 200
    data = response.get_json()['data']
    assert data['bio'] == 'Heart specialist'
    assert data['role'] == 'doctor'
    assert data['email'] == 'doctor@example.com'
    assert data['verified'] is False
    assert data['available_slots'] == [{'day': 'friday', 'slots': ['14:00']}]


def test_cannot_update_someone_else(client, patient, doctor):
    doc, _ = doctor
    _, headers = patient
    response = client.put(f'/api/users/{doc["id"]}', json={'bio': 'x'}, headers=headers)
    assert response.status_code == 403


def test_health_endpoints(client):
    assert client.get('/health').status_code == 200
    assert client.get('/health/live').status_code == 200
    assert client.get('/health/ready').status_code == 200
    response = client.get('/nope')
    assert response.status_code == 404
    assert response.get_json()['success'] is False


@pytest.mark.parametrize('payload', [
    {'name': 'Num', 'email': 'num@example.com', 'password': 12345678, 'role': 'patient'},
    {'name': ['Num'], 'email': 'num@example.com', 'password': 'secret123', 'role': 'patient'},
    [{'name': 'Num', 'email': 'num@example.com', 'password': 'secret123', 'role': 'patient'}],
])
def test_register_rejects_wrong_types(client, payload):
    response = client.post('/api/auth/register', json=payload)
    assert response.status_code == 400
    assert response.get_json()['success'] is False


def test_login_rejects_wrong_types(client, patient):
    response = client.post('/api/auth/login', json={'email': 42, 'password': 'secret123'})
    assert response.status_code == 400
    response = client.post('/api/auth/login', json=['patient@example.com', 'secret123'])
    assert response.status_code == 400


def test_profile_update_rejects_non_string_fields(client, doctor):
    doc, headers = doctor
    response = client.put(f'/api/users/{doc["id"]}', json={'bio': {'text': 'x'}}, headers=headers)
    assert response.status_code == 400
    response = client.put(f'/api/users/{doc["id"]}', json=['bio'], headers=headers)
    assert response.status_code == 400
