"""create_contract_manager_tables

Revision ID: 3c8e1a52d7f4
Revises:
Create Date: 2026-10-18 09:12:41.318204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
import sqlmodel


# revision identifiers, used by Alembic.
revision: str = '3c8e1a52d7f4'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema - Create registry, role membership and event log tables."""
    op.create_table(
        'contract_entries',
        sa.Column('address', sqlmodel.sql.sqltypes.AutoString(length=42), nullable=False),
        sa.Column('description', sqlmodel.sql.sqltypes.AutoString(length=1024), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('address'),
    )
    op.create_table(
        'role_members',
        sa.Column('role', sqlmodel.sql.sqltypes.AutoString(length=64), nullable=False),
        sa.Column('account', sqlmodel.sql.sqltypes.AutoString(length=42), nullable=False),
        sa.Column('granted_by', sqlmodel.sql.sqltypes.AutoString(length=42), nullable=True),
        sa.Column('granted_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('role', 'account'),
    )
    op.create_table(
        'contract_events',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(length=64), nullable=False),
        sa.Column('address', sqlmodel.sql.sqltypes.AutoString(length=42), nullable=True),
        sa.Column('payload', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_contract_events_name'), 'contract_events', ['name'], unique=False)
    op.create_index(op.f('ix_contract_events_address'), 'contract_events', ['address'], unique=False)


def downgrade() -> None:
    """Downgrade schema - Drop registry, role membership and event log tables."""
    op.drop_index(op.f('ix_contract_events_address'), table_name='contract_events')
    op.drop_index(op.f('ix_contract_events_name'), table_name='contract_events')
    op.drop_table('contract_events')
    op.drop_table('role_members')
    op.drop_table('contract_entries')
