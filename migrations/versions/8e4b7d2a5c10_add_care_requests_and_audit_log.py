"""Add caretaker requests, medical visit requests and audit log

Revision ID: 8e4b7d2a5c10
Revises: 3c1f0a9d2b71
Create Date: 2026-09-21 16:05:00

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '8e4b7d2a5c10'
down_revision = '3c1f0a9d2b71'
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'caretaker_requests',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('patient_id', sa.String(length=36), sa.ForeignKey('users.id'), nullable=False, index=True),
        sa.Column('caretaker_id', sa.String(length=36), sa.ForeignKey('users.id'), nullable=False, index=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('request_date', sa.Date(), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=True),
        sa.Column('duration', sa.String(length=50), nullable=True),
        sa.Column('care_type', sa.String(length=100), nullable=True),
        sa.Column('message', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        'medical_visit_requests',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('patient_id', sa.String(length=36), sa.ForeignKey('users.id'), nullable=False, index=True),
        sa.Column('medical_assistant_id', sa.String(length=36), sa.ForeignKey('users.id'), nullable=True, index=True),
        sa.Column('request_date', sa.Date(), nullable=False),
        sa.Column('visit_date', sa.Date(), nullable=False),
        sa.Column('visit_time', sa.String(length=5), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending', index=True),
        sa.Column('service_type', sa.String(length=50), nullable=False),
        sa.Column('patient_address', sa.String(length=255), nullable=False),
        sa.Column('patient_latitude', sa.Float(), nullable=True),
        sa.Column('patient_longitude', sa.Float(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('urgency', sa.String(length=10), nullable=False, server_default='medium'),
        sa.Column('estimated_duration', sa.String(length=50), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        'audit_logs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('entity_type', sa.String(length=32), nullable=False, index=True),
        sa.Column('entity_id', sa.String(length=36), nullable=False, index=True),
        sa.Column('action', sa.String(length=16), nullable=False),
        sa.Column('actor_id', sa.String(length=36), sa.ForeignKey('users.id'), nullable=True, index=True),
        sa.Column('actor_role', sa.String(length=20), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=True),
        sa.Column('changes', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )


def downgrade():
    op.drop_table('audit_logs')
    op.drop_table('medical_visit_requests')
    op.drop_table('caretaker_requests')
