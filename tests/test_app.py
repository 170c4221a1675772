import logging

import pytest

from app import create_app
from app.config import TestingConfig
from app.models import AuditLog, User
from app.utils.audit import log_audit
from tests.conftest import MONDAY


def test_lower_case_log_level_is_accepted(monkeypatch):
    monkeypatch.setattr(TestingConfig, 'LOG_LEVEL', 'debug')
    create_app('testing')
    assert logging.getLogger().level == logging.DEBUG


def test_booking_and_cancellation_are_audited(app, client, patient, doctor):
    pat, headers = patient
    doc, _ = doctor
    appointment = client.post(
        '/api/appointments',
        json={'provider_id': doc['id'], 'date': MONDAY, 'time': '09:00'},
        headers=headers,
    ).get_json()['data']
    client.put(f'/api/appointments/{appointment["id"]}', json={'status': 'cancelled'}, headers=headers)

    with app.app_context():
        entries = AuditLog.query.filter_by(entity_id=appointment['id']).order_by(AuditLog.id).all()
        trail = [e.to_dict() for e in entries]

    assert [(e['entity_type'], e['action'], e['status']) for e in trail] == [
        ('appointment', 'create', 'upcoming'),
        ('appointment', 'update', 'cancelled'),
    ]
    assert trail[0]['actor_id'] == pat['id']
    assert trail[0]['actor_role'] == 'patient'
    assert trail[0]['changes'] == {'provider_id': doc['id'], 'date': MONDAY, 'time': '09:00'}
    assert trail[1]['changes'] == {'status': 'cancelled'}


def test_intake_writes_are_audited(app, client, patient, doctor):
    _, headers = patient
    doc, doc_headers = doctor
    appointment = client.post(
        '/api/appointments',
        json={'provider_id': doc['id'], 'date': MONDAY, 'time': '10:00'},
        headers=headers,
    ).get_json()['data']
    prescription = client.post(
        f'/api/appointments/{appointment["id"]}/prescriptions',
        json={'medicine': 'Aspirin', 'dosage': '75mg', 'times': ['08:00'], 'duration': '90 days'},
        headers=doc_headers,
    ).get_json()['data']
    for taken in (False, True):
        client.post('/api/medication-intakes', json={
            'prescription_id': prescription['id'], 'date': '2026-10-20', 'time': '08:00', 'taken': taken,
        }, headers=headers)

    with app.app_context():
        prescribed = AuditLog.query.filter_by(entity_type='prescription').one()
        intakes = AuditLog.query.filter_by(entity_type='medication_intake').order_by(AuditLog.id).all()
        assert prescribed.actor_role == 'doctor'
        assert prescribed.changes['medicine'] == 'Aspirin'
        assert [(e.action, e.changes['taken']) for e in intakes] == [('create', False), ('update', True)]


def test_only_known_entities_are_audited(app):
    with app.app_context():
        with pytest.raises(ValueError):
            log_audit('create', User(id='u-1', role='patient'), None)
