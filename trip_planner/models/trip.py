"""
Trip model, the aggregate root for days, plans, expenses, flights and hotels
"""
from sqlalchemy import Column, String, Text, CheckConstraint, Index
from sqlalchemy.orm import relationship
import enum

from trip_planner.core.db import Base


class TripStatus(str, enum.Enum):
    """Trip lifecycle status"""
    DRAFT = "draft"
    ACTIVE = "active"
    DONE = "done"


class Trip(Base):
    """
    Trip represents one planned journey.
    Dates are stored as YYYY-MM-DD text, instants as UTC ISO-8601 text.
    """
    __tablename__ = "trips"
    __table_args__ = (
        CheckConstraint("status IN ('draft', 'active', 'done')", name="ck_trips_status"),
        Index("idx_trips_updated_at", "updated_at"),
    )

    id = Column(String, primary_key=True)
    title = Column(Text, nullable=False)
    destination = Column(Text, nullable=False)
    start_date = Column(String(10), nullable=False)
    end_date = Column(String(10), nullable=False)
    currency = Column(String, nullable=False, server_default="JPY")
    memo = Column(Text, nullable=True)
    status = Column(String, nullable=False, server_default=TripStatus.DRAFT.value)
    created_at = Column(String, nullable=False)
    updated_at = Column(String, nullable=False)

    # Children are removed by ON DELETE CASCADE in the database
    days = relationship("Day", back_populates="trip", cascade="all, delete-orphan", passive_deletes=True)
    plans = relationship("Plan", back_populates="trip", cascade="all, delete-orphan", passive_deletes=True)
    expenses = relationship("Expense", back_populates="trip", cascade="all, delete-orphan", passive_deletes=True)
    flights = relationship("Flight", back_populates="trip", cascade="all, delete-orphan", passive_deletes=True)
    hotels = relationship("Hotel", back_populates="trip", cascade="all, delete-orphan", passive_deletes=True)
