"""add flight leg columns

Revision ID: 20260315_1000_add_flight_leg_columns
Revises: 20260301_0900_create_travel_tables
Create Date: 2026-03-15 10:00:00
"""
from alembic import op
import sqlalchemy as sa

revision = '20260315_1000_add_flight_leg_columns'
down_revision = '20260301_0900_create_travel_tables'
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.add_column('flights', sa.Column('leg_type', sa.String(), nullable=False, server_default='multi'))
    op.add_column('flights', sa.Column('leg_order', sa.Integer(), nullable=False, server_default='1'))
    op.add_column('flights', sa.Column('from_airport', sa.Text(), nullable=True))
    op.add_column('flights', sa.Column('to_airport', sa.Text(), nullable=True))


def downgrade() -> None:
    with op.batch_alter_table('flights') as batch_op:
        batch_op.drop_column('to_airport')
        batch_op.drop_column('from_airport')
        batch_op.drop_column('leg_order')
        batch_op.drop_column('leg_type')
