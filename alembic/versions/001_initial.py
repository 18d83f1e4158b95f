"""Initial migration

Revision ID: 001
Revises:
Create Date: 2026-10-17 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ACTIVE_SLOT_PREDICATE = sa.text("status IN ('CONFIRMED', 'REQUESTED')")


def upgrade() -> None:
    # Create reservations table
    op.create_table(
        'reservations',
        sa.Column('id', sa.BigInteger().with_variant(sa.Integer(), 'sqlite'), primary_key=True, autoincrement=True),
        sa.Column('reservation_number', sa.String(50), nullable=False, unique=True),
        sa.Column('customer_name', sa.String(100), nullable=False),
        sa.Column('customer_phone', sa.String(20), nullable=False),
        sa.Column('customer_email', sa.String(100)),
        sa.Column('reserved_at', sa.DateTime(), nullable=False),
        sa.Column('party_size', sa.Integer()),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('cancel_reason', sa.String(500)),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False),
    )

    # One active reservation per timestamp
    op.create_index(
        'uq_reservations_active_slot',
        'reservations',
        ['reserved_at'],
        unique=True,
        postgresql_where=ACTIVE_SLOT_PREDICATE,
        sqlite_where=ACTIVE_SLOT_PREDICATE,
    )
    op.create_index('ix_reservations_status', 'reservations', ['status'])


def downgrade() -> None:
    op.drop_index('ix_reservations_status', table_name='reservations')
    op.drop_index('uq_reservations_active_slot', table_name='reservations')
    op.drop_table('reservations')
