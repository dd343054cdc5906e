"""create_floor_tables

Revision ID: 3a1f0c2b9d47
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
import sqlmodel


# revision identifiers, used by Alembic.
revision: str = '3a1f0c2b9d47'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'regions',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_table(
        'products',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(length=200), nullable=False),
        sa.Column('price', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_table(
        'restaurant_tables',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('region_id', sa.Uuid(), nullable=False),
        sa.Column('table_number', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='1'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['region_id'], ['regions.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('region_id', 'table_number', name='uq_restaurant_tables_region_number'),
    )
    op.create_index('ix_restaurant_tables_region_id', 'restaurant_tables', ['region_id'])
    op.create_table(
        'table_sessions',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('table_id', sa.Uuid(), nullable=False),
        sa.Column('status', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
        sa.Column('total', sa.Integer(), nullable=False),
        sa.Column('payment_method', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=True),
        sa.Column('opened_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('closed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['table_id'], ['restaurant_tables.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_table_sessions_table_id', 'table_sessions', ['table_id'])
    # At most one open session per table
    op.create_index(
        'uq_table_sessions_open_table',
        'table_sessions',
        ['table_id'],
        unique=True,
        sqlite_where=sa.text("status = 'open'"),
        postgresql_where=sa.text("status = 'open'"),
    )
    op.create_table(
        'table_session_items',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('session_id', sa.Uuid(), nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(length=200), nullable=False),
        sa.Column('price', sa.Integer(), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['session_id'], ['table_sessions.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('session_id', 'name', name='uq_table_session_items_session_name'),
    )
    op.create_index('ix_table_session_items_session_id', 'table_session_items', ['session_id'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_table_session_items_session_id', table_name='table_session_items')
    op.drop_table('table_session_items')
    op.drop_index('uq_table_sessions_open_table', table_name='table_sessions')
    op.drop_index('ix_table_sessions_table_id', table_name='table_sessions')
    op.drop_table('table_sessions')
    op.drop_index('ix_restaurant_tables_region_id', table_name='restaurant_tables')
    op.drop_table('restaurant_tables')
    op.drop_table('products')
    op.drop_table('regions')
