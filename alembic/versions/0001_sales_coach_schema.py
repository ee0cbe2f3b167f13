"""Sales coach schema: users, one-time codes, sessions, recordings, appointments

Revision ID: 0001_sales_coach_schema
Revises: 
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_sales_coach_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

user_role = sa.Enum('sales_rep', 'manager', 'admin', name='userrole')
otp_purpose = sa.Enum('email_verification', 'phone_verification', 'password_reset', 'login', name='otppurpose')
recording_status = sa.Enum('active', 'archived', 'deleted', name='recordingstatus')
appointment_status = sa.Enum(
    'scheduled', 'confirmed', 'in_progress', 'completed', 'cancelled', 'no_show', name='appointmentstatus'
)


def upgrade() -> None:
    op.create_table('users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('phone', sa.String(), nullable=False),
        sa.Column('role', user_role, server_default='sales_rep', nullable=False),
        sa.Column('company', sa.String(), nullable=True),
        sa.Column('department', sa.String(), nullable=True),
        sa.Column('is_email_verified', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('is_phone_verified', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),

        # Denormalized stats snapshot
        sa.Column('stats_total_recordings', sa.Integer(), server_default='0', nullable=False),
        sa.Column('stats_total_appointments', sa.Integer(), server_default='0', nullable=False),
        sa.Column('stats_avg_spin_score', sa.Integer(), server_default='0', nullable=False),
        sa.Column('stats_total_call_duration', sa.Integer(), server_default='0', nullable=False),

        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.Column('last_login', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_role', 'users', ['role'])
    op.create_index('ix_users_is_active', 'users', ['is_active'])
    op.create_index('ix_users_created_at', 'users', ['created_at'])

    op.create_table('one_time_codes',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('purpose', otp_purpose, nullable=False),
        sa.Column('code', sa.String(length=16), nullable=False),
        sa.Column('is_used', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('attempts', sa.Integer(), server_default='0', nullable=False),
        sa.Column('max_attempts', sa.Integer(), server_default='5', nullable=False),
        sa.Column('expires_at', sa.DateTime(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_one_time_codes_id', 'one_time_codes', ['id'])
    op.create_index('ix_one_time_codes_email', 'one_time_codes', ['email'])
    op.create_index('ix_one_time_codes_expires_at', 'one_time_codes', ['expires_at'])
    op.create_index('idx_one_time_codes_email_purpose_created', 'one_time_codes', ['email', 'purpose', 'created_at'])

    op.create_table('sessions',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('token', sa.String(), nullable=False),
        sa.Column('refresh_token', sa.String(), nullable=True),
        sa.Column('device_info', sa.JSON(), nullable=False),
        sa.Column('ip_address', sa.String(), nullable=True),
        sa.Column('user_agent', sa.String(), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('last_activity_at', sa.DateTime(), nullable=False),
        sa.Column('expires_at', sa.DateTime(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('refresh_token'),
    )
    op.create_index('ix_sessions_id', 'sessions', ['id'])
    op.create_index('ix_sessions_user_id', 'sessions', ['user_id'])
    op.create_index('ix_sessions_token', 'sessions', ['token'], unique=True)
    op.create_index('ix_sessions_expires_at', 'sessions', ['expires_at'])
    op.create_index('idx_sessions_user_active', 'sessions', ['user_id', 'is_active'])
    op.create_index('idx_sessions_active_expires', 'sessions', ['is_active', 'expires_at'])

    op.create_table('recordings',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=True),
        sa.Column('status', recording_status, server_default='active', nullable=False),
        sa.Column('analysis', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_recordings_id', 'recordings', ['id'])
    op.create_index('ix_recordings_user_id', 'recordings', ['user_id'])
    op.create_index('ix_recordings_status', 'recordings', ['status'])
    op.create_index('idx_recordings_user_created', 'recordings', ['user_id', 'created_at'])

    op.create_table('appointments',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('client_name', sa.String(), nullable=False),
        sa.Column('scheduled_date', sa.DateTime(), nullable=False),
        sa.Column('status', appointment_status, server_default='scheduled', nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_appointments_id', 'appointments', ['id'])
    op.create_index('ix_appointments_user_id', 'appointments', ['user_id'])
    op.create_index('ix_appointments_status', 'appointments', ['status'])
    op.create_index('idx_appointments_user_scheduled', 'appointments', ['user_id', 'scheduled_date'])


def downgrade() -> None:
    op.drop_table('appointments')
    op.drop_table('recordings')
    op.drop_table('sessions')
    op.drop_table('one_time_codes')
    op.drop_table('users')

    bind = op.get_bind()
    for enum_type in (appointment_status, recording_status, otp_purpose, user_role):
        enum_type.drop(bind, checkfirst=True)
