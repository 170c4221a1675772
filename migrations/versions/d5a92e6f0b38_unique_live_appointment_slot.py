"""Enforce one live appointment per provider slot

Partial unique index on (provider_id, date, time) for upcoming/ongoing rows,
so concurrent bookings of the same slot cannot both commit.

Revision ID: d5a92e6f0b38
Revises: 8e4b7d2a5c10
Create Date: 2026-10-02 09:40:00

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'd5a92e6f0b38'
down_revision = '8e4b7d2a5c10'
branch_labels = None
depends_on = None

LIVE_SLOT_CONDITION = sa.text("status IN ('upcoming', 'ongoing')")


def upgrade():
    op.create_index(
        'uq_appointments_live_slot',
        'appointments',
        ['provider_id', 'date', 'time'],
        unique=True,
        postgresql_where=LIVE_SLOT_CONDITION,
        sqlite_where=LIVE_SLOT_CONDITION,
    )


def downgrade():
    op.drop_index('uq_appointments_live_slot', table_name='appointments')
