"""create subscribers table

Revision ID: 20261019_01_subscribers
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from app.core.types import GUID

# revision identifiers, used by Alembic.
revision: str = "20261019_01_subscribers"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'subscribers',
        sa.Column('id', GUID(), primary_key=True),
        sa.Column('email', sa.String(length=320), nullable=False),
        sa.Column('interests', sa.String(length=64), nullable=False),
        sa.Column('zip', sa.String(length=16), nullable=True),
        sa.Column('source', sa.String(length=50), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        # The upsert's ON CONFLICT target; must be a real constraint, not just an index
        sa.UniqueConstraint('email', name='uq_subscribers_email'),
    )
    op.create_index('ix_subscribers_created_at', 'subscribers', ['created_at'])


def downgrade() -> None:
    op.drop_index('ix_subscribers_created_at', table_name='subscribers')
    op.drop_table('subscribers')
