"""Initial schema: users, appointments, prescriptions, medication intakes

Revision ID: 3c1f0a9d2b71
Revises:
Create Date: 2026-09-14 10:20:00

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3c1f0a9d2b71'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('email', sa.String(length=120), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('specialization', sa.String(length=120), nullable=True),
        sa.Column('experience', sa.String(length=50), nullable=True),
        sa.Column('languages', sa.JSON(), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('gender', sa.String(length=20), nullable=True),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('profile_image', sa.String(length=500), nullable=True),
        sa.Column('verified', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('rating', sa.Float(), nullable=True),
        sa.Column('available', sa.Boolean(), nullable=True),
        sa.Column('address', sa.String(length=255), nullable=True),
        sa.Column('city', sa.String(length=100), nullable=True),
        sa.Column('state', sa.String(length=100), nullable=True),
        sa.Column('zip_code', sa.String(length=20), nullable=True),
        sa.Column('country', sa.String(length=100), nullable=True),
        sa.Column('latitude', sa.Float(), nullable=True),
        sa.Column('longitude', sa.Float(), nullable=True),
        sa.Column('available_slots', sa.JSON(), nullable=True),
        sa.Column('transportation_type', sa.String(length=50), nullable=True),
        sa.Column('available_days', sa.JSON(), nullable=True),
        sa.Column('medical_id', sa.String(length=64), nullable=True),
        sa.Column('internship_certificate', sa.String(length=500), nullable=True),
        sa.Column('digilocker_verified', sa.Boolean(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    with op.batch_alter_table('users', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_users_email'), ['email'], unique=True)
        batch_op.create_index(batch_op.f('ix_users_role'), ['role'], unique=False)

    op.create_table(
        'appointments',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('patient_id', sa.String(length=36), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('provider_id', sa.String(length=36), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('type', sa.String(length=20), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('time', sa.String(length=5), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='upcoming'),
        sa.Column('location', sa.String(length=255), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    with op.batch_alter_table('appointments', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_appointments_patient_id'), ['patient_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_appointments_provider_id'), ['provider_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_appointments_status'), ['status'], unique=False)

    op.create_table(
        'prescriptions',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('appointment_id', sa.String(length=36), sa.ForeignKey('appointments.id'), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('medicine', sa.String(length=255), nullable=False),
        sa.Column('dosage', sa.String(length=50), nullable=False),
        sa.Column('times', sa.JSON(), nullable=False),
        sa.Column('duration', sa.String(length=50), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    with op.batch_alter_table('prescriptions', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_prescriptions_appointment_id'), ['appointment_id'], unique=False)

    op.create_table(
        'medication_intakes',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('prescription_id', sa.String(length=36), sa.ForeignKey('prescriptions.id'), nullable=False),
        sa.Column('patient_id', sa.String(length=36), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('medicine', sa.String(length=255), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('time', sa.String(length=5), nullable=False),
        sa.Column('taken', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint('prescription_id', 'date', 'time', name='uq_medication_intake_dose'),
    )
    with op.batch_alter_table('medication_intakes', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_medication_intakes_prescription_id'), ['prescription_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_medication_intakes_patient_id'), ['patient_id'], unique=False)


def downgrade():
    op.drop_table('medication_intakes')
    op.drop_table('prescriptions')
    op.drop_table('appointments')
    op.drop_table('users')
