"""Create tool wear tables: tools, production_entries, swap_events, mold_comments, scrap_entries

Revision ID: 3f1c2a7d9b10
Revises:
Create Date: 2025-08-21 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '3f1c2a7d9b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create every table and index"""

    tool_condition_enum = postgresql.ENUM('OK', 'WARN', 'REPLACE', name='tool_condition_enum')
    tool_condition_enum.create(op.get_bind(), checkfirst=True)

    op.create_table(
        'tools',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, comment='Tool record ID'),
        sa.Column('mold_id', sa.String(100), nullable=False, comment='Mold the tool is mounted on'),
        sa.Column('tool_id', sa.String(100), nullable=False, comment='Tool label within the mold'),
        sa.Column('useful_life', sa.Integer(), nullable=False, comment='Capacity in pieces'),
        sa.Column('accumulated_production', sa.Integer(), nullable=False, comment='Pieces produced since the last swap'),
        sa.Column(
            'condition',
            postgresql.ENUM('OK', 'WARN', 'REPLACE', name='tool_condition_enum', create_type=False),
            nullable=False,
            comment='Wear condition',
        ),
        sa.Column('warning', sa.Boolean(), nullable=False, comment='True whenever condition is not OK'),
        sa.Column('notes', sa.Text(), nullable=False, comment='Free-text notes'),
        sa.Column('is_active', sa.Boolean(), nullable=False, comment='Inactive tools are kept for audit only'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, comment='Creation time'),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, comment='Last modification time'),
    )
    op.create_index('ix_tools_mold_id', 'tools', ['mold_id'])
    op.create_index(
        'ix_tools_mold_tool_active',
        'tools',
        ['mold_id', 'tool_id'],
        unique=True,
        postgresql_where=sa.text('is_active'),
        sqlite_where=sa.text('is_active'),
    )

    op.create_table(
        'production_entries',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True, comment='Entry ID'),
        sa.Column('tool_pk', postgresql.UUID(as_uuid=True), nullable=False, comment='Owning tool record'),
        sa.Column('pieces', sa.Integer(), nullable=False, comment='Pieces produced'),
        sa.Column('production_date', sa.Date(), nullable=False, comment='Production day in plant local time'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, comment='Entry creation time'),
        sa.ForeignKeyConstraint(['tool_pk'], ['tools.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_production_entries_tool_date', 'production_entries', ['tool_pk', 'production_date'])

    op.create_table(
        'swap_events',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True, comment='Swap ID'),
        sa.Column('mold_id', sa.String(100), nullable=False, comment='Mold of the swapped tool'),
        sa.Column('tool_id', sa.String(100), nullable=False, comment='Label of the swapped tool'),
        sa.Column('production_before_swap', sa.Integer(), nullable=False, comment='Accumulated production at swap time'),
        sa.Column('swap_timestamp', sa.DateTime(timezone=True), nullable=False, comment='Swap instant (UTC)'),
    )
    op.create_index('ix_swap_events_swap_timestamp', 'swap_events', ['swap_timestamp'])

    op.create_table(
        'mold_comments',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('mold_id', sa.String(100), nullable=False, comment='Mold annotated'),
        sa.Column('comment', sa.Text(), nullable=False, comment='Comment text'),
        sa.Column('comment_date', sa.Date(), nullable=False, comment='Day the comment refers to'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_mold_comments_mold_id', 'mold_comments', ['mold_id'])

    op.create_table(
        'scrap_entries',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('mold_id', sa.String(100), nullable=False, comment='Mold'),
        sa.Column('month_start', sa.Date(), nullable=False, comment='First day of the month'),
        sa.Column('quantity', sa.Integer(), nullable=False, comment='Rejected units'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('mold_id', 'month_start', name='uq_scrap_entries_mold_month'),
    )


def downgrade() -> None:
    """Drop every table and the condition enum"""
    op.drop_table('scrap_entries')
    op.drop_index('ix_mold_comments_mold_id', table_name='mold_comments')
    op.drop_table('mold_comments')
    op.drop_index('ix_swap_events_swap_timestamp', table_name='swap_events')
    op.drop_table('swap_events')
    op.drop_index('ix_production_entries_tool_date', table_name='production_entries')
    op.drop_table('production_entries')
    op.drop_index('ix_tools_mold_tool_active', table_name='tools')
    op.drop_index('ix_tools_mold_id', table_name='tools')
    op.drop_table('tools')

    postgresql.ENUM(name='tool_condition_enum').drop(op.get_bind(), checkfirst=True)
