"""create users, medication and dose tables

Revision ID: 3c1f0a9d2b7e
Revises:
Create Date: 2026-10-19 09:12:44.301532

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3c1f0a9d2b7e'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('user_id', sa.String(36), primary_key=True),
        sa.Column('full_name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('phone_number', sa.String(50)),
        sa.Column('date_of_birth', sa.Date()),
        sa.Column('gender', sa.String(20)),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index('ix_users_email', 'users', ['email'])

    op.create_table(
        'medication',
        sa.Column('medication_id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.user_id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('dosage', sa.String(255), nullable=False),
        sa.Column('instruction', sa.Text(), nullable=False),
        sa.Column('reminder_times', sa.JSON(), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('days_of_week', sa.JSON(), nullable=False),
        sa.Column('notified_today', sa.Boolean(), server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index('ix_medication_user_id', 'medication', ['user_id'])
    op.create_index('ix_medication_start_date', 'medication', ['start_date'])

    op.create_table(
        'dose',
        sa.Column('dose_id', sa.String(36), primary_key=True),
        sa.Column('medication_id', sa.String(36), sa.ForeignKey('medication.medication_id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.user_id', ondelete='CASCADE'), nullable=False),
        sa.Column('scheduled_time', sa.DateTime(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index('ix_dose_medication_id', 'dose', ['medication_id'])
    op.create_index('ix_dose_user_id', 'dose', ['user_id'])


def downgrade():
    op.drop_table('dose')
    op.drop_table('medication')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
