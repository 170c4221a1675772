#!/usr/bin/env python3
"""
Create demo users for every role.
Run with: python3 init_users.py
"""
from app import create_app
from app.extensions import db
from app.models import User

WEEKDAY_SLOTS = ['09:00', '10:00', '11:00', '14:00', '15:00']

# Demo users to create
DEMO_USERS = [
    {
        'name': 'Priya Patient',
        'email': 'patient@healtogether.dev',
        'password': 'patient123',
        'role': 'patient',
        'city': 'Hyderabad',
    },
    {
        'name': 'Dr. Arjun Rao',
        'email': 'doctor@healtogether.dev',
        'password': 'doctor123',
        'role': 'doctor',
        'specialization': 'General Medicine',
        'experience': '12 years',
        'languages': ['English', 'Telugu', 'Hindi'],
        'available_slots': [
            {'day': day, 'slots': list(WEEKDAY_SLOTS)}
            for day in ('monday', 'tuesday', 'wednesday', 'thursday', 'friday')
        ],
    },
    {
        'name': 'Meena Caretaker',
        'email': 'caretaker@healtogether.dev',
        'password': 'care123',
        'role': 'caretaker',
        'transportation_type': 'Personal Car',
        'available_days': ['monday', 'wednesday', 'friday'],
        'available_slots': [
            {'day': 'monday', 'slots': ['08:00', '17:00']},
            {'day': 'wednesday', 'slots': ['08:00', '17:00']},
            {'day': 'friday', 'slots': ['08:00', '17:00']},
        ],
    },
    {
        'name': 'Ravi Assistant',
        'email': 'assistant@healtogether.dev',
        'password': 'assist123',
        'role': 'medical-assistant',
        'medical_id': 'MA-1001',
    },
]


def create_users():
    """Create demo users, skipping emails that already exist"""
    app = create_app()

    with app.app_context():
        db.create_all()

        print("=" * 60)
        print("Initializing Demo Users")
        print("=" * 60)
        print()

        created_count = 0

        for user_data in DEMO_USERS:
            email = user_data['email']

            existing = User.query.filter_by(email=email).first()
            if existing:
                print(f"  - User '{email}' already exists (skipping)")
                continue

            fields = {k: v for k, v in user_data.items() if k != 'password'}
            user = User(verified=True, **fields)
            user.set_password(user_data['password'])

            db.session.add(user)
            created_count += 1
            print(f"  ✓ Created: {email} ({user_data['role']}) - Password: {user_data['password']}")

        db.session.commit()

        print()
        print("=" * 60)
        print(f"✅ Created {created_count} new user(s)")
        print("=" * 60)
        print("\n⚠️  IMPORTANT: These are demo credentials, do not use them in production!")


if __name__ == '__main__':
    create_users()
