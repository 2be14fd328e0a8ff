"""Create scheduling tables

Revision ID: 001_create_scheduling_tables
Revises:
Create Date: 2025-03-03

Mechanics, service locations, appointments and work logs.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_create_scheduling_tables'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema - add mechanics, locations, appointments, work_logs."""
    op.create_table('mechanics',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='active'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_mechanics_id'), 'mechanics', ['id'], unique=False)
    op.create_index(op.f('ix_mechanics_status'), 'mechanics', ['status'], unique=False)

    op.create_table('locations',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('location_name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='available'),
        sa.Column('capacity', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_locations_id'), 'locations', ['id'], unique=False)
    op.create_index(op.f('ix_locations_status'), 'locations', ['status'], unique=False)

    op.create_table('appointments',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('mechanic_id', sa.Integer(), nullable=True),
        sa.Column('location_id', sa.Integer(), nullable=True),
        sa.Column('customer_name', sa.String(length=200), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('appointment_date', sa.DateTime(), nullable=False),
        sa.Column('scheduled_start_time', sa.DateTime(), nullable=True),
        sa.Column('scheduled_end_time', sa.DateTime(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='scheduled'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['mechanic_id'], ['mechanics.id']),
        sa.ForeignKeyConstraint(['location_id'], ['locations.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_appointments_id'), 'appointments', ['id'], unique=False)
    op.create_index(op.f('ix_appointments_mechanic_id'), 'appointments', ['mechanic_id'], unique=False)
    op.create_index(op.f('ix_appointments_location_id'), 'appointments', ['location_id'], unique=False)
    op.create_index(op.f('ix_appointments_appointment_date'), 'appointments', ['appointment_date'], unique=False)
    op.create_index(op.f('ix_appointments_status'), 'appointments', ['status'], unique=False)
    # Conflict and availability lookups filter on resource + date
    op.create_index('ix_appointments_mechanic_date', 'appointments', ['mechanic_id', 'appointment_date'], unique=False)
    op.create_index('ix_appointments_location_date', 'appointments', ['location_id', 'appointment_date'], unique=False)

    op.create_table('work_logs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('appointment_id', sa.Integer(), nullable=True),
        sa.Column('mechanic_id', sa.Integer(), nullable=True),
        sa.Column('start_time', sa.DateTime(), nullable=True),
        sa.Column('end_time', sa.DateTime(), nullable=True),
        sa.Column('hours_worked', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('billable_hours', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['appointment_id'], ['appointments.id']),
        sa.ForeignKeyConstraint(['mechanic_id'], ['mechanics.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_work_logs_id'), 'work_logs', ['id'], unique=False)
    op.create_index(op.f('ix_work_logs_appointment_id'), 'work_logs', ['appointment_id'], unique=False)
    op.create_index(op.f('ix_work_logs_mechanic_id'), 'work_logs', ['mechanic_id'], unique=False)


def downgrade() -> None:
    """Downgrade schema - remove scheduling tables."""
    op.drop_table('work_logs')
    op.drop_table('appointments')
    op.drop_table('locations')
    op.drop_table('mechanics')
