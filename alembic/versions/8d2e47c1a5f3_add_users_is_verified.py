"""add users.is_verified

Revision ID: 8d2e47c1a5f3
Revises: 3c1f0a9d2b7e
Create Date: 2026-10-19 14:03:10.518220

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '8d2e47c1a5f3'
down_revision = '3c1f0a9d2b7e'
branch_labels = None
depends_on = None


def upgrade():
    op.add_column('users', sa.Column('is_verified', sa.Boolean(), nullable=False, server_default=sa.false()))


def downgrade():
    op.drop_column('users', 'is_verified')
