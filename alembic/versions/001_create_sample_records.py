"""Create sample_records table

Revision ID: 001
Revises:
Create Date: 2026-10-19

WHY: Sample records keep a database-assigned application id that is never
reused, a generated storage key (``_id``), the caller's fields as JSON
and the soft-delete flags.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the sample_records table and its lookup indexes."""
    op.create_table(
        'sample_records',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('_id', sa.String(length=32), nullable=False),
        sa.Column('data', sa.JSON(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('is_deleted', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True,
    )
    op.create_index('ix_sample_records__id', 'sample_records', ['_id'], unique=True)
    op.create_index('ix_sample_records_is_active', 'sample_records', ['is_active'])
    op.create_index('ix_sample_records_is_deleted', 'sample_records', ['is_deleted'])


def downgrade() -> None:
    """Drop the sample_records table."""
    op.drop_index('ix_sample_records_is_deleted', table_name='sample_records')
    op.drop_index('ix_sample_records_is_active', table_name='sample_records')
    op.drop_index('ix_sample_records__id', table_name='sample_records')
    op.drop_table('sample_records')
