"""create travel tables

Revision ID: 20260301_0900_create_travel_tables
Revises:
Create Date: 2026-03-01 09:00:00
"""
from alembic import op
import sqlalchemy as sa

revision = '20260301_0900_create_travel_tables'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.String(), nullable=False),
        sa.Column('updated_at', sa.String(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'trips',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('destination', sa.Text(), nullable=False),
        sa.Column('start_date', sa.String(10), nullable=False),
        sa.Column('end_date', sa.String(10), nullable=False),
        sa.Column('currency', sa.String(), nullable=False, server_default='JPY'),
        sa.Column('memo', sa.Text(), nullable=True),
        sa.Column('status', sa.String(), nullable=False, server_default='draft'),
        *_timestamps(),
        sa.CheckConstraint("status IN ('draft', 'active', 'done')", name='ck_trips_status'),
    )
    op.create_index('idx_trips_updated_at', 'trips', ['updated_at'])

    op.create_table(
        'days',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('trip_id', sa.String(), sa.ForeignKey('trips.id', ondelete='CASCADE'), nullable=False),
        sa.Column('day_no', sa.Integer(), nullable=False),
        sa.Column('date', sa.String(10), nullable=False),
        sa.Column('title', sa.Text(), nullable=True),
        sa.Column('note', sa.Text(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint('trip_id', 'day_no', name='uq_days_trip_day_no'),
        sa.UniqueConstraint('trip_id', 'date', name='uq_days_trip_date'),
    )
    op.create_index('idx_days_trip_day_no', 'days', ['trip_id', 'day_no'])

    op.create_table(
        'plans',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('trip_id', sa.String(), sa.ForeignKey('trips.id', ondelete='CASCADE'), nullable=False),
        sa.Column('day_id', sa.String(), sa.ForeignKey('days.id', ondelete='CASCADE'), nullable=False),
        sa.Column('start_min', sa.Integer(), nullable=True),
        sa.Column('end_min', sa.Integer(), nullable=True),
        sa.Column('place', sa.Text(), nullable=False),
        sa.Column('detail', sa.Text(), nullable=True),
        sa.Column('map_url', sa.Text(), nullable=True),
        sa.Column('food', sa.Text(), nullable=True),
        sa.Column('transport', sa.Text(), nullable=True),
        sa.Column('cost_estimate', sa.Integer(), nullable=True),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='0'),
        *_timestamps(),
    )
    op.create_index('idx_plans_day_sort', 'plans', ['day_id', 'sort_order', 'start_min'])

    op.create_table(
        'expenses',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('trip_id', sa.String(), sa.ForeignKey('trips.id', ondelete='CASCADE'), nullable=False),
        sa.Column('day_id', sa.String(), sa.ForeignKey('days.id', ondelete='SET NULL'), nullable=True),
        sa.Column('item', sa.Text(), nullable=False),
        sa.Column('amount', sa.Integer(), nullable=False),
        sa.Column('currency', sa.String(), nullable=False, server_default='JPY'),
        sa.Column('category', sa.Text(), nullable=True),
        sa.Column('spent_at', sa.String(), nullable=False),
        sa.Column('note', sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index('idx_expenses_trip_spent_at', 'expenses', ['trip_id', 'spent_at'])

    op.create_table(
        'flights',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('trip_id', sa.String(), sa.ForeignKey('trips.id', ondelete='CASCADE'), nullable=False),
        sa.Column('from_code', sa.String(), nullable=False),
        sa.Column('to_code', sa.String(), nullable=False),
        sa.Column('depart_at', sa.String(), nullable=False),
        sa.Column('arrive_at', sa.String(), nullable=False),
        sa.Column('airline', sa.Text(), nullable=False),
        sa.Column('flight_no', sa.String(), nullable=False),
        sa.Column('price', sa.Integer(), nullable=True),
        sa.Column('currency', sa.String(), nullable=True, server_default='KRW'),
        sa.Column('note', sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index('idx_flights_trip_depart_at', 'flights', ['trip_id', 'depart_at'])

    op.create_table(
        'hotels',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('trip_id', sa.String(), sa.ForeignKey('trips.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('city', sa.Text(), nullable=False),
        sa.Column('check_in_date', sa.String(10), nullable=False),
        sa.Column('check_out_date', sa.String(10), nullable=False),
        sa.Column('confirmation_no', sa.String(), nullable=True),
        sa.Column('total_price', sa.Integer(), nullable=True),
        sa.Column('currency', sa.String(), nullable=True, server_default='JPY'),
        sa.Column('note', sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index('idx_hotels_trip_checkin', 'hotels', ['trip_id', 'check_in_date'])

    op.create_table(
        'app_meta',
        sa.Column('key', sa.String(), primary_key=True),
        sa.Column('value', sa.JSON(), nullable=False),
        sa.Column('updated_at', sa.String(), nullable=False),
    )


def downgrade() -> None:
    op.drop_table('app_meta')
    op.drop_index('idx_hotels_trip_checkin', table_name='hotels')
    op.drop_table('hotels')
    op.drop_index('idx_flights_trip_depart_at', table_name='flights')
    op.drop_table('flights')
    op.drop_index('idx_expenses_trip_spent_at', table_name='expenses')
    op.drop_table('expenses')
    op.drop_index('idx_plans_day_sort', table_name='plans')
    op.drop_table('plans')
    op.drop_index('idx_days_trip_day_no', table_name='days')
    op.drop_table('days')
    op.drop_index('idx_trips_updated_at', table_name='trips')
    op.drop_table('trips')
